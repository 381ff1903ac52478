"""Payload builders and a fake feed API for the test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx

BASE_URL = "https://feed.test/v4/articles"


def article_payload(article_id: int, title: str | None = None, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": article_id,
        "title": title or f"Article {article_id}",
        "authors": [{"name": "chris", "socials": {"x": "https://x.com/chris"}}],
        "url": f"https://news.test/{article_id}",
        "image_url": f"https://news.test/{article_id}.jpg",
        "news_site": "Test Site",
        "summary": f"Summary {article_id}",
        "published_at": "2025-04-20T12:00:00Z",
        "updated_at": "2025-04-20T12:30:00Z",
        "featured": False,
        "launches": [],
        "events": [],
    }
    payload.update(extra)
    return payload


def page_payload(
    ids: list[int], next_url: str | None = None, count: int | None = None
) -> dict[str, Any]:
    return {
        "count": count if count is not None else len(ids),
        "next": next_url,
        "previous": None,
        "results": [article_payload(i) for i in ids],
    }


Responder = Callable[[httpx.Request], httpx.Response]


def _responder(body: Any, status: int) -> Responder:
    def respond(request: httpx.Request) -> httpx.Response:
        if isinstance(body, Exception):
            raise body
        if isinstance(body, str):
            return httpx.Response(status, content=body.encode())
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, content=json.dumps(body).encode())

    return respond


class FakeFeedAPI:
    """Routes requests to canned responses and records every request made.

    First-page requests (base path with a ``_limit`` parameter) go to the
    ``first_page`` response; anything else must be registered by exact URL.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._first_page: Responder | None = None
        self._by_url: dict[str, Responder] = {}

    def first_page(self, body: Any, status: int = 200) -> None:
        self._first_page = _responder(body, status)

    def at(self, url: str, body: Any, status: int = 200) -> None:
        self._by_url[url] = _responder(body, status)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        exact = str(request.url)
        if exact in self._by_url:
            return self._by_url[exact](request)
        if (
            self._first_page is not None
            and request.url.path == httpx.URL(BASE_URL).path
            and "_limit" in request.url.params
        ):
            return self._first_page(request)
        return httpx.Response(404, json={"detail": "not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)
