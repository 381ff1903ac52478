from __future__ import annotations

from pathlib import Path

import aiosqlite

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS articles (
    id INTEGER PRIMARY KEY,
    title TEXT,
    url TEXT,
    image_url TEXT,
    news_site TEXT,
    summary TEXT,
    published_at TEXT,
    updated_at TEXT,
    featured INTEGER NOT NULL DEFAULT 0,
    author_name TEXT
);
"""


async def get_connection(
    db_path: str | Path, busy_timeout_ms: int = 5000
) -> aiosqlite.Connection:
    conn = await aiosqlite.connect(str(db_path), timeout=busy_timeout_ms / 1000)
    conn.row_factory = aiosqlite.Row
    await conn.execute("PRAGMA journal_mode=WAL")
    await conn.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
    return conn


async def init_db(
    db_path: str | Path, busy_timeout_ms: int = 5000
) -> aiosqlite.Connection:
    path = Path(db_path)
    if str(db_path) != ":memory:":
        path.parent.mkdir(parents=True, exist_ok=True)
    conn = await get_connection(db_path, busy_timeout_ms)
    try:
        await conn.executescript(SCHEMA_SQL)
        await conn.commit()
    except BaseException:
        await conn.close()
        raise
    return conn
