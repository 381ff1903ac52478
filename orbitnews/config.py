from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    # Spaceflight News API endpoint
    feed_api_base: str = "https://api.spaceflightnewsapi.net/v4/articles"

    # Private per-install data directory holding the favorites database
    data_dir: Path = field(
        default_factory=lambda: Path.home() / ".orbitnews"
    )
    db_filename: str = "favorites.db"

    # Paging
    page_size: int = 5
    refresh_page_size: int = 10
    load_more_threshold: int = 4

    # Timeouts
    http_timeout: float = 15.0
    busy_timeout_ms: int = 5000

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename

    @classmethod
    def from_env(cls) -> Settings:
        data_dir_raw = os.environ.get("ORBITNEWS_DATA_DIR", "").strip()
        data_dir = (
            Path(data_dir_raw).expanduser()
            if data_dir_raw
            else Path.home() / ".orbitnews"
        )
        return cls(
            feed_api_base=os.environ.get("ORBITNEWS_FEED_URL", "").strip()
            or cls.feed_api_base,
            data_dir=data_dir,
            page_size=_env_int("ORBITNEWS_PAGE_SIZE", cls.page_size),
            refresh_page_size=_env_int(
                "ORBITNEWS_REFRESH_PAGE_SIZE", cls.refresh_page_size
            ),
            http_timeout=_env_float("ORBITNEWS_HTTP_TIMEOUT", cls.http_timeout),
            busy_timeout_ms=_env_int("ORBITNEWS_BUSY_TIMEOUT_MS", cls.busy_timeout_ms),
        )
