from __future__ import annotations

import hashlib
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from orbitnews.utils.dates import format_published, parse_iso_datetime


def placeholder_id(payload: dict[str, Any]) -> int:
    """Stable negative id for feed items that arrive without one.

    Server ids are positive, so a negative value never collides with them.
    """
    key = "|".join(
        str(payload.get(name) or "") for name in ("url", "title", "published_at")
    )
    digest = hashlib.sha1(key.encode("utf-8")).digest()
    return -(int.from_bytes(digest[:8], "big") >> 1) - 1


class Socials(BaseModel):
    x: str | None = None
    youtube: str | None = None
    instagram: str | None = None
    linkedin: str | None = None
    mastodon: str | None = None
    bluesky: str | None = None


class Author(BaseModel):
    name: str | None = None
    socials: Socials | None = None


class Launch(BaseModel):
    launch_id: str | None = None
    provider: str | None = None


class Event(BaseModel):
    event_id: int | None = None
    provider: str | None = None


class Article(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str | None = None
    authors: list[Author] | None = None
    url: str | None = None
    image_url: str | None = None
    news_site: str | None = None
    summary: str | None = None
    published_at: datetime | None = None
    updated_at: str | None = None
    featured: bool | None = None
    launches: list[Launch] | None = None
    events: list[Event] | None = None
    # Local-only flag, never sent back to the API
    is_favorite: bool = Field(default=False, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _fill_missing_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("id") is None:
            data = {**data, "id": placeholder_id(data)}
        return data

    @field_validator("published_at", mode="before")
    @classmethod
    def _parse_published_at(cls, v: Any) -> datetime | None:
        if v is None or isinstance(v, datetime):
            return v
        if isinstance(v, str):
            return parse_iso_datetime(v)
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Article):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def first_author_name(self) -> str | None:
        if not self.authors:
            return None
        return self.authors[0].name

    @property
    def formatted_published_at(self) -> str | None:
        return format_published(self.published_at)


class FeedPage(BaseModel):
    """One page of the article listing; ``next`` is absent on the last page."""

    count: int | None = None
    next: str | None = None
    previous: str | None = None
    results: list[Article] | None = None

    @property
    def articles(self) -> list[Article]:
        return list(self.results or [])
