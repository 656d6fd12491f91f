# -*- coding: utf-8 -*-
"""
Command-line front end for FoodLens.

Usage:
    foodlens serve
    foodlens analyze <image>
    foodlens search <food name>
    foodlens history [--remove TIMESTAMP | --clear]
    foodlens recent [--clear]
    foodlens popular
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .analysis.errors import is_api_key_error
from .analysis.models import FoodAnalysisResult
from .client.capture import CaptureError
from .client.display import (
    POPULAR_SEARCHES,
    confidence_tone,
    format_relative_date,
    history_stats,
    nutrition_rows,
)
from .client.state import View
from .client.storage import STORAGE_FILENAME, LocalStorage
from .config import settings


def _storage(args: argparse.Namespace) -> LocalStorage:
    root = Path(args.data_root).expanduser() if args.data_root else settings.data_root
    return LocalStorage(root / STORAGE_FILENAME)


def _client(args: argparse.Namespace):
    from .client.controller import FoodLensClient

    return FoodLensClient(base_url=args.server, storage=_storage(args))


def print_result(result: FoodAnalysisResult) -> None:
    print(f"{result.food_name}  [{result.confidence.value} confidence, {confidence_tone(result.confidence).value}]")
    if result.description:
        print(f"  {result.description}")
    print("-" * 50)
    for label, value, tone in nutrition_rows(result):
        print(f"  {label:<10} {value:>10}  ({tone.value})")
    print("-" * 50)
    if result.serving_size:
        print(f"Serving size: {result.serving_size}")
    if result.preparation_method:
        print(f"Preparation: {result.preparation_method}")
    if result.ingredients:
        print(f"Ingredients: {', '.join(result.ingredients)}")
    if result.dietary_tags:
        print(f"Tags: {', '.join(result.dietary_tags)}")
    for insight in result.health_insights:
        print(f"  * {insight}")
    if result.error:
        print(f"\nWarning: {result.error}")
        if is_api_key_error(result.error):
            print("Set GEMINI_API_KEY in the server environment and try again.")


def _report(client) -> int:
    state = client.state
    if state.failure:
        print(f"Error: {state.failure}")
        return 1
    if state.result is None:
        return 1
    print_result(state.result)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the API server."""
    import uvicorn

    uvicorn.run("foodlens.api:app", host=args.host, port=args.port, reload=False)
    return 0


def cmd_analyze(args: argparse.Namespace) -> int:
    """Analyze a food photo."""
    image = Path(args.image)
    if not image.exists():
        print(f"Error: Image not found: {image}")
        return 1
    client = _client(args)
    print(f"Analyzing: {image}")
    try:
        client.capture_and_analyze(image)
    except CaptureError as exc:
        print(f"Error: {exc}")
        return 1
    return _report(client)


def cmd_search(args: argparse.Namespace) -> int:
    """Look up a food by name."""
    query = " ".join(args.query).strip()
    if not query:
        print("Error: empty food name")
        return 1
    client = _client(args)
    client.go(View.search)
    print(f"Searching: {query}")
    client.search(query)
    return _report(client)


def cmd_history(args: argparse.Namespace) -> int:
    """List, prune or clear the local analysis history."""
    from .client.history import HistoryStore

    store = HistoryStore(_storage(args))

    if args.clear:
        if not args.yes:
            confirm = input("Clear all saved analyses? [y/N] ")
            if confirm.lower() != "y":
                print("Cancelled.")
                return 0
        store.clear()
        print("History cleared.")
        return 0

    if args.remove is not None:
        if store.remove(args.remove):
            print(f"Removed entry {args.remove}.")
        else:
            print(f"No entry with timestamp {args.remove}.")
        return 0

    entries = store.entries()
    if not entries:
        print("No analysis history yet.")
        return 0

    print(f"{len(entries)} {'analysis' if len(entries) == 1 else 'analyses'} saved")
    for entry in entries:
        n = entry.nutrition
        source = f'search "{entry.search_query}"' if entry.search_query else "photo"
        print(
            f"[{entry.timestamp}] {entry.food_name} ({format_relative_date(entry.timestamp)}, {source})"
            f"  {n.calories:g} cal | {n.protein_g:g}g protein | {n.fat_g:g}g fat | {n.carbs_g:g}g carbs"
        )

    if len(entries) > 1:
        stats = history_stats(entries)
        print("-" * 50)
        print(f"Avg calories: {stats['avg_calories']}")
        print(f"Avg protein: {stats['avg_protein_g']}g")
        print(f"Total scans: {stats['total_scans']}")
        print(f"Days tracking: {stats['days_tracking']}")
    return 0


def cmd_recent(args: argparse.Namespace) -> int:
    """Show recent food searches."""
    from .client.history import RecentSearches

    recent = RecentSearches(_storage(args))
    if args.clear:
        recent.clear()
        print("Recent searches cleared.")
        return 0
    items = recent.items()
    if not items:
        print("No recent searches.")
    for item in items:
        print(item)
    return 0


def cmd_popular(args: argparse.Namespace) -> int:  # noqa: ARG001
    """Show suggested searches."""
    for item in POPULAR_SEARCHES:
        print(item)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="FoodLens - AI food detector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--server", default=settings.server_url, help="FoodLens API base URL")
    parser.add_argument("--data-root", help="Local storage directory (default: ~/.foodlens)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=settings.host)
    serve_parser.add_argument("--port", type=int, default=settings.port)

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a food photo")
    analyze_parser.add_argument("image", help="Path to an image file")

    search_parser = subparsers.add_parser("search", help="Search a food by name")
    search_parser.add_argument("query", nargs="+", help="Food name")

    history_parser = subparsers.add_parser("history", help="Show analysis history")
    history_parser.add_argument("--remove", type=int, metavar="TIMESTAMP", help="Remove one entry")
    history_parser.add_argument("--clear", action="store_true", help="Remove all entries")
    history_parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")

    recent_parser = subparsers.add_parser("recent", help="Show recent searches")
    recent_parser.add_argument("--clear", action="store_true", help="Forget recent searches")

    subparsers.add_parser("popular", help="Show popular searches")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "serve": cmd_serve,
        "analyze": cmd_analyze,
        "search": cmd_search,
        "history": cmd_history,
        "recent": cmd_recent,
        "popular": cmd_popular,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
