from __future__ import annotations


class FeedError(Exception):
    """Base class for failures surfaced through ``FeedStore.error_message``."""


class InvalidFeedURL(FeedError):
    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid URL {url!r}{detail}")


class FeedDecodeError(FeedError):
    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Could not decode feed from {url}: {reason}")
