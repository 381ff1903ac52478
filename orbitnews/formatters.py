from __future__ import annotations

from orbitnews.news.models import Article
from orbitnews.news.store import FeedState

# Plain-text rendering helpers


def format_article(article: Article, index: int | None = None) -> str:
    prefix = f"{index}. " if index is not None else ""
    heart = " [fav]" if article.is_favorite else ""
    lines = [f"{prefix}{article.title or '(untitled)'}{heart}"]
    meta = " | ".join(
        part
        for part in (article.news_site, article.formatted_published_at)
        if part
    )
    if meta:
        lines.append(f"   {meta}")
    if article.url:
        lines.append(f"   {article.url}")
    return "\n".join(lines)


def format_article_list(articles: list[Article], empty_text: str = "No news available") -> str:
    if not articles:
        return empty_text
    return "\n\n".join(format_article(a, i) for i, a in enumerate(articles, 1))


def format_feed_state(state: FeedState) -> str:
    articles = state.page.articles if state.page else []
    body = format_article_list(articles)
    footer: list[str] = []
    if state.search_query:
        footer.append(f"Search: {state.search_query}")
    if state.page is not None:
        total = f" of {state.page.count}" if state.page.count is not None else ""
        footer.append(f"Showing {len(articles)}{total}")
        if state.page.next:
            footer.append("More available")
    if state.error_message:
        footer.append(f"Error: {state.error_message}")
    if not footer:
        return body
    return body + "\n\n" + "\n".join(footer)
