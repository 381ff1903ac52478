from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from orbitnews.config import Settings
from orbitnews.news.errors import FeedDecodeError, FeedError, InvalidFeedURL
from orbitnews.news.models import FeedPage

logger = logging.getLogger(__name__)

SORT_NEWEST_FIRST = "publishedAt:desc"


def _checked_url(raw: str) -> httpx.URL:
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidFeedURL(str(raw), str(exc)) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidFeedURL(str(raw), "expected an absolute http(s) URL")
    return url


def describe_error(exc: BaseException) -> str:
    """Human-readable text for a failed feed request."""
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code} from {exc.request.url}"
    if isinstance(exc, httpx.TimeoutException):
        return "The request timed out"
    if isinstance(exc, FeedError):
        return str(exc)
    return str(exc) or exc.__class__.__name__


class NewsClient:
    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base = settings.feed_api_base
        self._http = httpx.AsyncClient(
            timeout=settings.http_timeout,
            transport=transport,
            follow_redirects=True,
            headers={"User-Agent": "OrbitNews/1.0", "Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._http.aclose()

    def build_first_page_url(self, limit: int, search: str | None = None) -> str:
        """URL for the newest ``limit`` articles, optionally filtered by a search term."""
        if limit <= 0:
            raise InvalidFeedURL(self._base, f"limit must be positive, got {limit}")
        params: dict[str, str | int] = {
            "_limit": limit,
            "_sort": SORT_NEWEST_FIRST,
        }
        term = (search or "").strip()
        if term:
            params["search"] = term
        return str(_checked_url(self._base).copy_merge_params(params))

    async def fetch_first_page(self, limit: int, search: str | None = None) -> FeedPage:
        return await self.fetch_page(self.build_first_page_url(limit, search))

    async def fetch_page(self, url: str) -> FeedPage:
        """GET a feed page. ``url`` may be a server-provided ``next`` cursor."""
        target = _checked_url(url)
        logger.debug("Feed: GET %s", target)
        resp = await self._http.get(target)
        resp.raise_for_status()
        try:
            page = FeedPage.model_validate_json(resp.content)
        except ValidationError as exc:
            raise FeedDecodeError(str(target), f"{exc.error_count()} invalid field(s)") from exc
        logger.info(
            "Feed: got %d articles (next=%s)",
            len(page.results or []),
            "yes" if page.next else "no",
        )
        return page
