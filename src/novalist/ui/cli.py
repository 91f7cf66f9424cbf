from __future__ import annotations

import argparse
import logging
import sys
from functools import partial
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from novalist.app import export_playlists, show_chain, update_all_time, update_months, update_year
from novalist.config import configure_logging
from novalist.domain.aggregation import YEARLY_TOP_N
from novalist.domain.export import EXPORT_TOP_N
from novalist.domain.model import Scope, month_from_name
from novalist.domain.time_windows import MonthWindow, months_between, resolve_month

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_month(value: str) -> int:
    if value.isdigit():
        month = int(value)
        if not 1 <= month <= 12:
            raise argparse.ArgumentTypeError(f"Month must be between 1 and 12, got {value}")
        return month
    try:
        return month_from_name(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parse_year_month(value: str) -> MonthWindow:
    year, _, month = value.partition("-")
    try:
        return MonthWindow(int(year), int(month))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected YYYY-MM, got {value}") from exc


def _parse_top(value: str) -> int | None:
    if value.lower() in {"all", "none"}:
        return None
    try:
        top = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid track limit: {value}") from exc
    if top < 1:
        raise argparse.ArgumentTypeError("The track limit must be positive")
    return top


def _add_month_selection(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--month",
        type=_parse_month,
        help="Month number or English name (defaults to the previous month)",
    )
    parser.add_argument(
        "--year",
        type=int,
        help="Year of the month (defaults to the most recent one)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build Radio Nova playlists")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    month = subparsers.add_parser("month", help="Fetch the days of a month and rank its tracks")
    _add_month_selection(month)
    month.add_argument(
        "--from",
        dest="start",
        type=_parse_year_month,
        help="First month (YYYY-MM) of a range of months to update",
    )
    month.add_argument(
        "--to",
        dest="end",
        type=_parse_year_month,
        help="Last month (YYYY-MM) of the range (defaults to the previous month)",
    )
    month.add_argument(
        "--no-fetch",
        dest="fetch",
        action="store_false",
        help="Only re-rank and enrich the stored month playlist",
    )

    year = subparsers.add_parser("year", help="Aggregate the stored months of a year")
    year.add_argument("--year", type=int, required=True, help="Year to aggregate")
    year.add_argument(
        "--top",
        type=_parse_top,
        default=YEARLY_TOP_N,
        help="Number of tracks to keep, or 'all' (default: %(default)s)",
    )

    all_time = subparsers.add_parser("all", help="Aggregate every stored month")
    all_time.add_argument(
        "--top",
        type=_parse_top,
        default=None,
        help="Number of tracks to keep (default: all)",
    )

    chain = subparsers.add_parser("chain", help="Show month playlists with their rank moves")
    chain.add_argument("--year", type=int, help="Only show the months of this year")
    chain.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Tracks to show per month (default: %(default)s)",
    )

    export = subparsers.add_parser("export", help="Publish stored playlists to Spotify")
    _add_month_selection(export)
    export.add_argument(
        "--yearly",
        action="store_true",
        help="Export the stored top playlist of --year instead of a month",
    )
    export.add_argument(
        "--all",
        dest="every_month",
        action="store_true",
        help="Export every stored month playlist",
    )
    export.add_argument(
        "--top",
        type=_parse_top,
        default=EXPORT_TOP_N,
        help="Number of ranked tracks to export, or 'all' (default: %(default)s)",
    )
    export.add_argument(
        "--public",
        action="store_true",
        help="Create public playlists (default: private)",
    )
    export.add_argument(
        "--force",
        dest="skip_existing",
        action="store_false",
        help="Export even when a playlist with the same name already exists",
    )

    return parser.parse_args(list(argv))


def _month_windows(args: argparse.Namespace) -> list[MonthWindow]:
    if args.start is None and args.end is None:
        return [resolve_month(args.month, args.year)]
    if args.month is not None or args.year is not None:
        raise ValueError("A month range cannot be combined with --month or --year")
    if args.start is None:
        raise ValueError("A month range needs a --from month")
    return months_between(args.start, args.end or resolve_month())


def _export_scopes(args: argparse.Namespace) -> list[Scope] | None:
    if args.every_month:
        if args.month is not None or args.year is not None or args.yearly:
            raise ValueError("--all already selects every stored month")
        return None
    if args.yearly:
        if args.year is None:
            raise ValueError("--yearly needs a --year")
        if args.month is not None:
            raise ValueError("--yearly cannot be combined with --month")
        return [Scope.for_year(args.year)]
    window = resolve_month(args.month, args.year)
    return [Scope.for_month(window.year, window.month)]


def _prepare_command(args: argparse.Namespace) -> Callable[[], object]:
    """Validate and resolve the arguments into a ready-to-run command."""
    if args.command == "month":
        return partial(update_months, _month_windows(args), fetch=args.fetch)
    if args.command == "year":
        return partial(update_year, args.year, top_n=args.top)
    if args.command == "all":
        return partial(update_all_time, top_n=args.top)
    if args.command == "chain":
        return partial(show_chain, args.year, limit=args.limit)
    if args.command == "export":
        return partial(
            export_playlists,
            _export_scopes(args),
            top_n=args.top,
            public=args.public,
            skip_existing=args.skip_existing,
        )
    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else None)

    try:
        command = _prepare_command(parsed_args)
    except ValueError as exc:
        log.error("Invalid arguments: %s", exc)  # noqa: TRY400
        sys.exit(2)

    try:
        command()
    except Exception:
        log.exception("Fatal error while building playlists")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
