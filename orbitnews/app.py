from __future__ import annotations

import logging

import httpx

from orbitnews.config import Settings
from orbitnews.favorites import FavoritesStore
from orbitnews.news.client import NewsClient
from orbitnews.news.store import FeedStore

logger = logging.getLogger(__name__)


class OrbitApp:
    """Holds the shared stores handed to the presentation layer."""

    def __init__(
        self,
        settings: Settings,
        news: NewsClient,
        feed: FeedStore,
        favorites: FavoritesStore,
    ) -> None:
        self.settings = settings
        self.news = news
        self.feed = feed
        self.favorites = favorites

    @classmethod
    async def create(
        cls,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> OrbitApp:
        settings = settings or Settings.from_env()
        news = NewsClient(settings, transport=transport)
        feed = FeedStore(news, settings)
        favorites = FavoritesStore(settings.db_path, settings.busy_timeout_ms)
        if not await favorites.open():
            logger.warning("Continuing without local favorites")
        return cls(settings, news, feed, favorites)

    async def close(self) -> None:
        await self.favorites.close()
        await self.news.close()

    async def __aenter__(self) -> OrbitApp:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
