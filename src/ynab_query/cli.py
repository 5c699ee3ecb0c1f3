"""Command-line interface for the YNAB transaction query tools."""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from ynab_query import __version__
from ynab_query.config import ConfigurationError, load_config
from ynab_query.tools import ValidationError, invoke_tool
from ynab_query.utils.logging_config import get_logger, setup_logging

console = Console()
error_console = Console(stderr=True)
logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="ynab-query",
        description="List and search YNAB budget transactions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list --month 2024-03
  %(prog)s list --since-date 2024-01-01 --limit 50 --offset 50 --payments-only
  %(prog)s search coffee --since-date 2024-01-01 --page 2
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings.yaml (default: config/settings.yaml)",
    )

    parser.add_argument(
        "--config-dir",
        type=Path,
        default=Path("config"),
        help="Base config directory (default: ./config)",
    )

    parser.add_argument(
        "-b", "--budget-id",
        default=None,
        help="Budget ID (default: YNAB_BUDGET_ID or settings.yaml)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (-v, -vv)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List transactions")
    window = list_parser.add_mutually_exclusive_group()
    window.add_argument("--month", default=None, help="Month in YYYY-MM format")
    window.add_argument(
        "--since-date",
        default=None,
        help="List transactions since this date, YYYY-MM-DD (default: 30 days ago)",
    )
    list_parser.add_argument("--offset", type=int, default=None, help="Pagination offset (default: 0)")
    list_parser.add_argument(
        "--limit", type=int, default=None, help="Transactions per page (default: 100, max: 500)"
    )
    list_parser.add_argument(
        "--payments-only",
        action="store_true",
        help="Exclude transfers between your own accounts",
    )

    search_parser = subparsers.add_parser("search", help="Search transactions by memo or payee")
    search_parser.add_argument("search_text", help="Text to search for")
    search_parser.add_argument(
        "--since-date", required=True, help="Start date for search, YYYY-MM-DD"
    )
    search_parser.add_argument("--page", type=int, default=None, help="Page number (default: 1)")
    search_parser.add_argument(
        "--page-size", type=int, default=None, help="Results per page (default: 50, max: 100)"
    )

    return parser


def get_log_level(verbosity: int) -> str:
    """Convert verbosity count to log level.

    Args:
        verbosity: Number of -v flags.

    Returns:
        Log level string.
    """
    if verbosity >= 2:
        return "DEBUG"
    elif verbosity >= 1:
        return "INFO"
    else:
        return "WARNING"


def build_arguments(args: argparse.Namespace) -> tuple[str, dict[str, Any]]:
    """Translate parsed CLI arguments into a tool name and tool arguments.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Tuple of (tool name, arguments with unset options omitted).
    """
    if args.command == "list":
        name = "list_transactions"
        arguments = {
            "budget_id": args.budget_id,
            "month": args.month,
            "since_date": args.since_date,
            "offset": args.offset,
            "limit": args.limit,
            "payments_only": args.payments_only,
        }
    else:
        name = "search_transactions"
        arguments = {
            "budget_id": args.budget_id,
            "search_text": args.search_text,
            "since_date": args.since_date,
            "page": args.page,
            "page_size": args.page_size,
        }
    return name, {k: v for k, v in arguments.items() if v is not None}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    # Load environment variables from .env file (if it exists)
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(settings_path=args.config, config_dir=args.config_dir)
    except (FileNotFoundError, ConfigurationError) as e:
        error_console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    level = get_log_level(args.verbose) if args.verbose else config.logging.level
    setup_logging(level=level, log_file=config.logging.file)

    name, arguments = build_arguments(args)

    try:
        output = invoke_tool(name, arguments, config)
    except ValidationError as e:
        error_console.print(f"[red]Invalid input: {escape(str(e))}[/red]")
        return 1

    if isinstance(output, str):
        error_console.print(f"[red]{escape(output)}[/red]")
        return 1

    console.print_json(data=output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
