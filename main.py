# main.py

"""Entry point for the deal_catalog viewer (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.models.criteria import SortKey

logger = logging.getLogger("deal_catalog.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    sort_keys = ", ".join(k.value for k in SortKey)

    parser = argparse.ArgumentParser(
        prog="deal_catalog",
        description="Browse, search, filter and sort game deals.",
        epilog=f"Sort keys: {sort_keys}",
    )
    parser.add_argument(
        "term",
        nargs="?",
        default=None,
        help="Title to search for (CLI mode). Omit for the current deals.",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        default=False,
        help="Run headless and print results instead of launching the TUI.",
    )
    parser.add_argument(
        "--store",
        default=None,
        help="Only show deals from this store ID.",
    )
    parser.add_argument(
        "--sort",
        default=None,
        help="Sort key applied to the results.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="table",
        dest="output_format",
        help="Output format (default: table).",
    )
    parser.add_argument(
        "--detail",
        default=None,
        metavar="GAME_ID",
        help="Print the detail for one game and exit.",
    )
    parser.add_argument(
        "--list-stores",
        action="store_true",
        default=False,
        dest="list_stores",
        help="List known store IDs and exit.",
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import DealCatalogApp

    try:
        app = DealCatalogApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("deal_catalog TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run one headless load/search and exit."""
    from src.cli.runner import cli_browse

    exit_code = asyncio.run(
        cli_browse(
            term=args.term,
            store_id=args.store,
            sort_key=args.sort,
            output_format=args.output_format,
        )
    )
    sys.exit(exit_code)


def _run_detail(game_id: str) -> None:
    """Print one game's detail and exit."""
    from src.cli.runner import cli_detail

    exit_code = asyncio.run(cli_detail(game_id))
    sys.exit(exit_code)


def _run_list_stores() -> None:
    from src.cli.runner import list_stores

    sys.exit(list_stores())


def main() -> None:
    """Route to the TUI (default) or one of the headless commands."""
    parser = _build_parser()
    args = parser.parse_args()

    tui_mode = not (
        args.list_stores
        or args.detail is not None
        or args.cli
        or args.term is not None
    )
    log_file = setup_logging(console=not tui_mode)
    logger.info("deal_catalog starting, log file: %s", log_file)

    if args.list_stores:
        _run_list_stores()
    elif args.detail is not None:
        _run_detail(args.detail)
    elif tui_mode:
        _run_tui()
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
