"""Test suite for the orbitnews package."""
