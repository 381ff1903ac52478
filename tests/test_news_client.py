"""URL building and error mapping in the feed HTTP client."""

from __future__ import annotations

import httpx
import pytest

from orbitnews.config import Settings
from orbitnews.news.client import NewsClient, describe_error
from orbitnews.news.errors import FeedDecodeError, InvalidFeedURL

from tests.support import BASE_URL, FakeFeedAPI, page_payload


class TestBuildFirstPageURL:
    @pytest.mark.asyncio
    async def test_limit_and_sort(self, news_client: NewsClient) -> None:
        url = httpx.URL(news_client.build_first_page_url(5))

        assert url.host == "feed.test"
        assert url.path == "/v4/articles"
        assert url.params["_limit"] == "5"
        assert url.params["_sort"] == "publishedAt:desc"
        assert "search" not in url.params

    @pytest.mark.asyncio
    async def test_search_term_is_trimmed(self, news_client: NewsClient) -> None:
        url = httpx.URL(news_client.build_first_page_url(3, "  mars rover "))

        assert url.params["search"] == "mars rover"

    @pytest.mark.asyncio
    async def test_blank_search_is_ignored(self, news_client: NewsClient) -> None:
        url = httpx.URL(news_client.build_first_page_url(3, "   "))

        assert "search" not in url.params

    def test_invalid_base_url(self, settings: Settings) -> None:
        client = NewsClient(Settings(feed_api_base="invalid_url", data_dir=settings.data_dir))

        with pytest.raises(InvalidFeedURL):
            client.build_first_page_url(5)

    @pytest.mark.asyncio
    async def test_non_positive_limit(self, news_client: NewsClient) -> None:
        with pytest.raises(InvalidFeedURL):
            news_client.build_first_page_url(0)


class TestFetchPage:
    @pytest.mark.asyncio
    async def test_decodes_page(self, news_client: NewsClient, fake_api: FakeFeedAPI) -> None:
        fake_api.first_page(page_payload([1, 2], next_url=f"{BASE_URL}?offset=2"))

        page = await news_client.fetch_first_page(2)

        assert [a.id for a in page.articles] == [1, 2]
        assert page.next == f"{BASE_URL}?offset=2"
        assert len(fake_api.requests) == 1

    @pytest.mark.asyncio
    async def test_http_error_status(self, news_client: NewsClient, fake_api: FakeFeedAPI) -> None:
        fake_api.first_page({"detail": "down"}, status=503)

        with pytest.raises(httpx.HTTPStatusError) as excinfo:
            await news_client.fetch_first_page(2)

        assert describe_error(excinfo.value).startswith("HTTP 503 from https://feed.test/")

    @pytest.mark.asyncio
    async def test_malformed_json(self, news_client: NewsClient, fake_api: FakeFeedAPI) -> None:
        fake_api.first_page("{not json")

        with pytest.raises(FeedDecodeError):
            await news_client.fetch_first_page(2)

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, news_client: NewsClient, fake_api: FakeFeedAPI) -> None:
        fake_api.first_page({"results": "nope"})

        with pytest.raises(FeedDecodeError):
            await news_client.fetch_first_page(2)

    @pytest.mark.asyncio
    async def test_relative_next_url_is_rejected_without_request(
        self, news_client: NewsClient, fake_api: FakeFeedAPI
    ) -> None:
        with pytest.raises(InvalidFeedURL):
            await news_client.fetch_page("/v4/articles?offset=2")

        assert fake_api.requests == []


def test_describe_error_fallbacks() -> None:
    assert describe_error(httpx.ReadTimeout("slow")) == "The request timed out"
    assert describe_error(httpx.ConnectError("refused")) == "refused"
    assert describe_error(RuntimeError()) == "RuntimeError"
