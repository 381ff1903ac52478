"""Shared fixtures: temporary settings, the fake feed API and an open favorites store."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from orbitnews.config import Settings
from orbitnews.favorites import FavoritesStore
from orbitnews.news.client import NewsClient
from orbitnews.news.models import Article, Author

from tests.support import BASE_URL, FakeFeedAPI


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(feed_api_base=BASE_URL, data_dir=tmp_path / "data")


@pytest.fixture
def fake_api() -> FakeFeedAPI:
    return FakeFeedAPI()


@pytest_asyncio.fixture
async def news_client(settings: Settings, fake_api: FakeFeedAPI) -> AsyncIterator[NewsClient]:
    client = NewsClient(settings, transport=fake_api.transport)
    yield client
    await client.close()


@pytest_asyncio.fixture
async def favorites_store(settings: Settings) -> AsyncIterator[FavoritesStore]:
    store = FavoritesStore(settings.db_path, settings.busy_timeout_ms)
    assert await store.open()
    yield store
    await store.close()


@pytest.fixture
def make_article() -> Callable[..., Article]:
    def factory(article_id: int = 1, title: str | None = "Test Insert", **extra: Any) -> Article:
        fields: dict[str, Any] = {
            "id": article_id,
            "title": title,
            "authors": [Author(name="chris"), Author(name="maria")],
            "url": "https://test.com",
            "image_url": "https://test.com/image.jpg",
            "news_site": "Test Site",
            "summary": "Insert test summary",
            "published_at": "2025-04-20T12:00:00Z",
            "updated_at": "2025-04-20T12:00:00Z",
            "featured": True,
        }
        fields.update(extra)
        return Article.model_validate(fields)

    return factory
