from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import httpx

from orbitnews.config import Settings
from orbitnews.news.client import NewsClient, describe_error
from orbitnews.news.errors import FeedError
from orbitnews.news.models import Article, FeedPage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedState:
    page: FeedPage | None
    is_loading: bool
    error_message: str | None
    search_query: str


Listener = Callable[[FeedState], None]


class FeedStore:
    """Paginated, searchable article feed.

    All mutation happens on the event loop that awaits these coroutines.
    ``is_loading`` is advisory; overlapping ``fetch`` calls are resolved by
    a request generation counter so that only the newest response is applied.
    """

    def __init__(self, news: NewsClient, settings: Settings | None = None) -> None:
        settings = settings or Settings()
        self._news = news
        self._page_size = settings.page_size
        self._refresh_page_size = settings.refresh_page_size
        self._threshold = settings.load_more_threshold

        self.page: FeedPage | None = None
        self.is_loading = False
        self.error_message: str | None = None
        self._search_query = ""

        self._generation = 0
        self._listeners: list[Listener] = []

    # ── Observable state ─────────────────────────────────────

    @property
    def state(self) -> FeedState:
        return FeedState(
            page=self.page,
            is_loading=self.is_loading,
            error_message=self.error_message,
            search_query=self._search_query,
        )

    @property
    def articles(self) -> list[Article]:
        return self.page.articles if self.page else []

    @property
    def search_query(self) -> str:
        return self._search_query

    @search_query.setter
    def search_query(self, value: str) -> None:
        self._search_query = value or ""
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state listener. Returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Feed listener %r failed", listener)

    # ── Operations ───────────────────────────────────────────

    async def fetch(
        self,
        limit: int | None = None,
        search_text: str | None = None,
        show_loading: bool = True,
    ) -> None:
        """Load the first page, replacing whatever was loaded before."""
        self._generation += 1
        generation = self._generation
        self.error_message = None
        self.is_loading = show_loading
        self._notify()

        try:
            page = await self._news.fetch_first_page(limit or self._page_size, search_text)
        except (FeedError, httpx.HTTPError) as exc:
            if generation == self._generation:
                self.error_message = describe_error(exc)
            logger.warning("Feed fetch failed: %s", exc)
        else:
            if generation == self._generation:
                self.page = page
            else:
                logger.debug("Discarding stale feed response (generation %d)", generation)
        finally:
            if generation == self._generation:
                self.is_loading = False
            self._notify()

    async def load_more(self) -> None:
        """Append the next page. No-op while loading or on the last page."""
        if self.is_loading or self.page is None or not self.page.next:
            return

        base_page = self.page
        generation = self._generation
        self.is_loading = True
        self.error_message = None
        self._notify()

        try:
            new_page = await self._news.fetch_page(base_page.next)
        except (FeedError, httpx.HTTPError) as exc:
            if generation == self._generation:
                self.error_message = describe_error(exc)
            logger.warning("Feed load-more failed: %s", exc)
        else:
            # A fetch that started meanwhile owns the page now
            if generation == self._generation and self.page is base_page:
                self.page = base_page.model_copy(
                    update={
                        "results": base_page.articles + new_page.articles,
                        "next": new_page.next,
                    }
                )
            else:
                logger.debug("Discarding stale load-more response")
        finally:
            if generation == self._generation:
                self.is_loading = False
            self._notify()

    async def search(self, show_loading: bool = True) -> None:
        """Re-fetch with the current query, keeping the number of visible items."""
        loaded = len(self.articles)
        await self.fetch(
            limit=loaded or self._page_size,
            search_text=self._search_query,
            show_loading=show_loading,
        )

    async def refresh(self) -> None:
        """Pull-to-refresh: reload without the loading indicator."""
        await self.fetch(
            limit=self._refresh_page_size,
            search_text=self._search_query,
            show_loading=False,
        )

    def should_load_more(self, index: int) -> bool:
        """Whether showing the item at ``index`` should trigger ``load_more``."""
        total = len(self.articles)
        if self.is_loading or total == 0 or not (self.page and self.page.next):
            return False
        return index >= total - self._threshold
