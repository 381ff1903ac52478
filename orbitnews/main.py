from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from orbitnews.app import OrbitApp
from orbitnews.config import Settings
from orbitnews.formatters import format_article_list, format_feed_state

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Read the OrbitNews feed.")
    parser.add_argument("--search", default="", help="filter articles by keyword")
    parser.add_argument("--pages", type=int, default=1, help="number of pages to load")
    parser.add_argument(
        "--favorites", action="store_true", help="show locally saved favorites"
    )
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> None:
    settings = Settings.from_env()
    async with await OrbitApp.create(settings) as app:
        if args.favorites:
            articles = await app.favorites.search(args.search)
            print(format_article_list(articles, empty_text="No favorites"))
            return

        app.feed.search_query = args.search
        await app.feed.fetch(search_text=args.search)
        for _ in range(max(args.pages, 1) - 1):
            if not (app.feed.page and app.feed.page.next) or app.feed.error_message:
                break
            await app.feed.load_more()
        print(format_feed_state(app.feed.state))


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        asyncio.run(_run(_parse_args(argv)))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
