from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import aiosqlite

from orbitnews.news.models import Article, Author
from orbitnews.utils.dates import parse_iso_datetime, to_iso_string
from orbitnews.utils.text import sanitize

_COLUMN_NAMES = (
    "id", "title", "url", "image_url", "news_site", "summary",
    "published_at", "updated_at", "featured", "author_name",
)
_COLUMNS = ", ".join(_COLUMN_NAMES)


def _bind_text(value: str | None) -> str | None:
    # Empty text is stored as NULL so "absent" and "empty" read back the same way
    return value if value else None


def _read_text(row: Mapping[str, Any], column: str) -> str | None:
    value = row[column]
    if value is None:
        return None
    return sanitize(str(value)) or None


def _like_pattern(keyword: str) -> str:
    escaped = (
        keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


def row_to_article(row: Mapping[str, Any]) -> Article:
    author_name = _read_text(row, "author_name")
    return Article(
        id=row["id"],
        title=_read_text(row, "title"),
        authors=[Author(name=author_name)] if author_name else None,
        url=_read_text(row, "url"),
        image_url=_read_text(row, "image_url"),
        news_site=_read_text(row, "news_site"),
        summary=_read_text(row, "summary"),
        published_at=parse_iso_datetime(_read_text(row, "published_at")),
        updated_at=_read_text(row, "updated_at"),
        featured=bool(row["featured"]),
        is_favorite=True,
    )


def article_to_params(article: Article) -> tuple[Any, ...]:
    return (
        article.id,
        _bind_text(article.title),
        _bind_text(article.url),
        _bind_text(article.image_url),
        _bind_text(article.news_site),
        _bind_text(article.summary),
        to_iso_string(article.published_at),
        _bind_text(article.updated_at),
        1 if article.featured else 0,
        _bind_text(article.first_author_name),
    )


def stored_article(article: Article) -> Article:
    """The article exactly as ``get`` would read it back after ``upsert``."""
    return row_to_article(dict(zip(_COLUMN_NAMES, article_to_params(article))))


class FavoritesRepository:
    """SQL for the ``articles`` table. Each call is its own autocommit unit."""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def upsert(self, article: Article) -> None:
        async with self._conn.execute(
            f"""INSERT OR REPLACE INTO articles ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            article_to_params(article),
        ):
            pass
        await self._conn.commit()

    async def delete(self, article_id: int) -> int:
        """Delete by id. Returns the number of removed rows."""
        async with self._conn.execute(
            "DELETE FROM articles WHERE id = ?", (article_id,)
        ) as cursor:
            removed = cursor.rowcount
        await self._conn.commit()
        return removed

    async def get(self, article_id: int) -> Article | None:
        async with self._conn.execute(
            f"SELECT {_COLUMNS} FROM articles WHERE id = ?", (article_id,)
        ) as cursor:
            row = await cursor.fetchone()
        return row_to_article(row) if row else None

    async def list_all(self) -> list[Article]:
        async with self._conn.execute(f"SELECT {_COLUMNS} FROM articles") as cursor:
            rows = await cursor.fetchall()
        return [row_to_article(r) for r in rows]

    async def search_title(self, keyword: str) -> list[Article]:
        """Case-insensitive substring match on title; empty keyword matches all rows."""
        if not keyword:
            return await self.list_all()
        # LIKE folds ASCII case only; non-ASCII titles match case-sensitively
        async with self._conn.execute(
            f"SELECT {_COLUMNS} FROM articles WHERE title LIKE ? ESCAPE '\\'",
            (_like_pattern(keyword),),
        ) as cursor:
            rows = await cursor.fetchall()
        return [row_to_article(r) for r in rows]

