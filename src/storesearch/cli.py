"""
Command-line front end.

Usage:
  storesearch [-c CATEGORY] [--config PATH] [--backend NAME] [-v] TERM...
  storesearch --init-config
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from storesearch.infra.config import ConfigAdapter, copy_default_config, load_config
from storesearch.infra.paths import SETTING_PATH
from storesearch.schemas import (
    Category,
    Loading,
    NoResults,
    NotSearchedYet,
    Results,
    SearchConfig,
    SearchState,
)
from storesearch.search import SearchSession, StoreFetcher

logger = logging.getLogger("storesearch")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storesearch",
        description="Search the store catalog.",
    )
    parser.add_argument("term", nargs="*", help="search text")
    parser.add_argument(
        "-c",
        "--category",
        default="all",
        help="all, music, software or ebooks (default: all)",
    )
    parser.add_argument("--config", help="path to a settings.toml/settings.json file")
    parser.add_argument("--backend", choices=["aiohttp", "httpx"])
    parser.add_argument(
        "--init-config",
        action="store_true",
        help=f"write the sample settings to {SETTING_PATH}",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def resolve_config(path: str | None, backend: str | None) -> SearchConfig:
    """Load settings, falling back to built-in defaults when none exist."""
    if path and not Path(path).expanduser().is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    try:
        data = load_config(path)
    except FileNotFoundError:
        data = {}
    cfg = ConfigAdapter(data).get_search_config()
    if backend:
        cfg.backend = backend
    return cfg


def render(state: SearchState, out: TextIO) -> None:
    """Print a search state the way the result list shows it."""
    match state:
        case NotSearchedYet() | Loading():
            pass
        case NoResults():
            print("Nothing found", file=out)
        case Results(items=items):
            for item in items:
                print(
                    f"{item.name} - {item.subtitle()} - {item.price_for_display()}",
                    file=out,
                )


async def run_search(
    session: SearchSession,
    text: str,
    category: Category,
) -> bool:
    """Run one search to completion.

    Returns:
        True if the request succeeded, False otherwise.
    """
    done: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
    if not session.perform_search(text, category, done.set_result):
        return False
    return await done


async def _search(cfg: SearchConfig, text: str, category: Category) -> int:
    async with StoreFetcher(cfg) as fetcher:
        session = SearchSession(fetcher, cfg)
        ok = await run_search(session, text, category)

    if not ok:
        print(
            "There was an error accessing the store. Please try again.",
            file=sys.stderr,
        )
        logger.debug("Last error: %s", session.last_error)
        return 1

    render(session.state, sys.stdout)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    levels = [logging.WARNING, logging.INFO, logging.DEBUG]
    logging.basicConfig(
        level=levels[min(args.verbose, len(levels) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.init_config:
        copy_default_config()
        return 0

    text = " ".join(args.term).strip()
    if not text:
        print("storesearch: error: search text is empty", file=sys.stderr)
        return 2

    try:
        category = Category.from_name(args.category)
        cfg = resolve_config(args.config, args.backend)
    except (ValueError, FileNotFoundError) as e:
        print(f"storesearch: error: {e}", file=sys.stderr)
        return 2

    return asyncio.run(_search(cfg, text, category))


if __name__ == "__main__":
    sys.exit(main())
