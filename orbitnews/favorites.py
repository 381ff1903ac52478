from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

import aiosqlite

from orbitnews.database.db import init_db
from orbitnews.database.repository import FavoritesRepository, stored_article
from orbitnews.news.models import Article
from orbitnews.utils.text import sanitize

logger = logging.getLogger(__name__)

# What a failing local store can raise
_DB_ERRORS = (aiosqlite.Error, sqlite3.Error, OSError, ValueError)


def sanitize_article(article: Article) -> Article:
    """Copy of ``article`` with control characters stripped from persisted text."""
    authors = article.authors
    if authors:
        authors = [a.model_copy(update={"name": sanitize(a.name)}) for a in authors]
    return article.model_copy(
        update={
            "authors": authors,
            "title": sanitize(article.title),
            "url": sanitize(article.url),
            "image_url": sanitize(article.image_url),
            "news_site": sanitize(article.news_site),
            "summary": sanitize(article.summary),
            "updated_at": sanitize(article.updated_at),
        }
    )


class FavoritesStore:
    """Locally persisted favorite articles.

    Failures never propagate: they are logged and the operation reports
    failure (``False`` / ``None`` / empty list). A store whose database
    could not be opened behaves as permanently empty.

    ``favorites`` is a snapshot refreshed by ``list_all``/``search`` and kept
    in step with this store's own writes. Writes from other connections are
    only seen after the next listing.
    """

    def __init__(self, db_path: str | Path, busy_timeout_ms: int = 5000) -> None:
        self._db_path = db_path
        self._busy_timeout_ms = busy_timeout_ms
        self._conn: aiosqlite.Connection | None = None
        self._repo: FavoritesRepository | None = None
        self.favorites: list[Article] = []

    async def __aenter__(self) -> FavoritesStore:
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._repo is not None

    async def open(self) -> bool:
        if self._repo is not None:
            return True
        try:
            self._conn = await init_db(self._db_path, self._busy_timeout_ms)
        except _DB_ERRORS as exc:
            logger.error("Could not open favorites database at %s: %s", self._db_path, exc)
            self._conn = None
            return False
        self._repo = FavoritesRepository(self._conn)
        logger.info("Opened favorites database at %s", self._db_path)
        await self.list_all()
        return True

    async def close(self) -> None:
        conn, self._conn, self._repo = self._conn, None, None
        if conn is not None:
            try:
                await conn.close()
            except _DB_ERRORS as exc:
                logger.warning("Error closing favorites database: %s", exc)

    def _require_repo(self, operation: str) -> FavoritesRepository | None:
        if self._repo is None:
            logger.warning("Favorites %s skipped: database is not open", operation)
        return self._repo

    # ── Writes ───────────────────────────────────────────────

    async def upsert(self, article: Article) -> bool:
        """Insert or fully replace the row for ``article.id``."""
        repo = self._require_repo("upsert")
        if repo is None:
            return False
        clean = sanitize_article(article)
        try:
            await repo.upsert(clean)
        except _DB_ERRORS as exc:
            logger.error("Error saving favorite %d: %s", article.id, exc)
            return False
        stored = stored_article(clean)
        self.favorites = [a for a in self.favorites if a.id != article.id]
        self.favorites.append(stored)
        logger.info("Saved favorite %d", article.id)
        return True

    async def delete(self, article_id: int) -> bool:
        """Delete by id. Deleting a missing id succeeds without changes."""
        repo = self._require_repo("delete")
        if repo is None:
            return False
        try:
            removed = await repo.delete(article_id)
        except _DB_ERRORS as exc:
            logger.error("Error deleting favorite %d: %s", article_id, exc)
            return False
        if removed:
            self.favorites = [a for a in self.favorites if a.id != article_id]
            logger.info("Deleted favorite %d", article_id)
        return True

    # ── Reads ────────────────────────────────────────────────

    async def get(self, article_id: int) -> Article | None:
        repo = self._require_repo("lookup")
        if repo is None:
            return None
        try:
            return await repo.get(article_id)
        except _DB_ERRORS as exc:
            logger.error("Error reading favorite %d: %s", article_id, exc)
            return None

    async def list_all(self) -> list[Article]:
        repo = self._require_repo("listing")
        if repo is None:
            return self.favorites
        try:
            self.favorites = await repo.list_all()
        except _DB_ERRORS as exc:
            logger.error("Error listing favorites: %s", exc)
        return self.favorites

    async def search(self, keyword: str) -> list[Article]:
        repo = self._require_repo("search")
        if repo is None:
            return self.favorites
        try:
            self.favorites = await repo.search_title(keyword)
        except _DB_ERRORS as exc:
            logger.error("Error searching favorites for %r: %s", keyword, exc)
        return self.favorites

    # ── Article detail helpers ───────────────────────────────

    async def is_favorite(self, article_id: int) -> bool:
        return await self.get(article_id) is not None

    async def resolve(self, article: Article) -> Article:
        """The stored copy of ``article`` if it is a favorite, else ``article`` itself."""
        stored = await self.get(article.id)
        return stored if stored is not None else article

    async def toggle(self, article: Article) -> bool:
        """Flip the favorite state of ``article``. Returns the resulting state."""
        if await self.is_favorite(article.id):
            deleted = await self.delete(article.id)
            return not deleted
        return await self.upsert(article)
