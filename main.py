# main.py

"""Entry point for the product_advisor headless CLI."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.models.recommendation import SearchFilters

logger = logging.getLogger("product_advisor.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="product_advisor",
        description="Natural-language product recommendations.",
        epilog=f"Sort keys: {', '.join(Settings.SORT_KEYS)}",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Describe what you need. Omit for a catalog overview.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )

    browse = parser.add_argument_group("browse")
    browse.add_argument(
        "--browse",
        action="store_true",
        default=False,
        help="List catalog products instead of ranking them.",
    )
    browse.add_argument("--category", default=None)
    browse.add_argument("--brand", default=None)
    browse.add_argument(
        "--min-price", type=float, default=None, dest="min_price",
    )
    browse.add_argument(
        "--max-price", type=float, default=None, dest="max_price",
    )
    browse.add_argument(
        "--sort",
        choices=Settings.SORT_KEYS,
        default="relevance",
        dest="sort_by",
    )

    actions = parser.add_argument_group(
        "favorites and product detail",
        "At most one of these per run.",
    )
    action = actions.add_mutually_exclusive_group()
    action.add_argument(
        "--favorites",
        action="store_true",
        default=False,
        help="List saved favorites.",
    )
    action.add_argument(
        "--add-favorite", type=int, metavar="ID", dest="add_favorite",
    )
    action.add_argument(
        "--remove-favorite", type=int, metavar="ID", dest="remove_favorite",
    )
    action.add_argument(
        "--toggle-favorite", type=int, metavar="ID", dest="toggle_favorite",
    )
    action.add_argument(
        "--clear-favorites",
        action="store_true",
        default=False,
        dest="clear_favorites",
    )
    action.add_argument(
        "--product",
        type=int,
        metavar="ID",
        default=None,
        help="Show one product with related suggestions.",
    )
    return parser


def _dispatch(args: argparse.Namespace) -> int:
    """Route parsed arguments to a runner command."""
    from src.cli import runner

    advisor = runner.open_advisor()
    if advisor is None:
        return 1

    try:
        if args.favorites:
            return runner.run_list_favorites(advisor, args.output_format)
        if args.add_favorite is not None:
            return runner.run_favorite_action(advisor, "add", args.add_favorite)
        if args.remove_favorite is not None:
            return runner.run_favorite_action(
                advisor, "remove", args.remove_favorite,
            )
        if args.toggle_favorite is not None:
            return runner.run_favorite_action(
                advisor, "toggle", args.toggle_favorite,
            )
        if args.clear_favorites:
            return runner.run_favorite_action(advisor, "clear")
        if args.product is not None:
            return runner.run_product_detail(
                advisor, args.product, args.output_format,
            )
        if args.browse:
            filters = SearchFilters(
                category=args.category,
                min_price=args.min_price,
                max_price=args.max_price,
                brand=args.brand,
            )
            return runner.run_browse(
                advisor,
                args.query or "",
                filters,
                args.sort_by,
                args.output_format,
            )
        if args.query is None:
            return runner.run_overview(advisor)
        return asyncio.run(
            runner.cli_recommend(advisor, args.query, args.output_format)
        )
    finally:
        advisor.favorites_store.close()


def main() -> None:
    """Parse arguments, configure logging and run one command."""
    log_file = setup_logging()
    logger.info("product_advisor starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    try:
        exit_code = _dispatch(args)
    except Exception:
        logger.critical("Fatal error during CLI run", exc_info=True)
        raise
    finally:
        logger.info("product_advisor shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
