"""
AI Search - Command Line Entry Point

Runs one search through the aggregation pipeline and prints the AI summary,
scored sources, media and related questions.
"""

import argparse
import asyncio
import json
import sys

from search_aggregator import SearchError, perform_search
from search_aggregator.history import SearchHistory
from search_aggregator.processing import ResultFormatter
from search_aggregator.settings import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="AI Search - web search with AI summaries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli/main.py "trending topics today"
  python cli/main.py --json "history of the printing press"
  python cli/main.py --history
        """,
    )
    parser.add_argument("query", nargs="?", help="Search query")
    parser.add_argument(
        "--json", action="store_true", help="Print the raw response as JSON"
    )
    parser.add_argument(
        "--history", action="store_true", help="List recent searches and exit"
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    """
    Run the search CLI
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    formatter = ResultFormatter()

    if args.history:
        settings = get_settings()
        history = SearchHistory(settings.history_file, limit=settings.history_limit)
        print(formatter.format_history(history.entries()))
        print(f"\nTotal searches: {history.total_searches}")
        return 0

    if not args.query:
        parser.error("a search query is required unless --history is given")

    try:
        response = await perform_search(args.query)
    except SearchError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(formatter.format_response(response))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
