from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from activity_sync.adapters.delivery import dump_events, load_events
from activity_sync.app import collect_activities, deliver_activities, reconcile_activities
from activity_sync.config import configure_logging
from activity_sync.domain.time_windows import DayWindow

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from activity_sync.domain.data_integration import SyncLedgerResult

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Collect activities and keep the activity ledger")
    subparsers = parser.add_subparsers(dest="command", required=True)

    collect = subparsers.add_parser(
        "collect",
        help="Collect one day of activities and deliver them (or write them to a file)",
    )
    collect.add_argument(
        "--day",
        type=str,
        help="ISO-8601 date (UTC) to collect; defaults to yesterday",
    )
    collect.add_argument(
        "--output",
        type=Path,
        help="Write the collected events to this JSON file instead of delivering them",
    )

    reconcile = subparsers.add_parser(
        "reconcile",
        help="Merge a JSON file of activity events into the local ledger",
    )
    reconcile.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON file as written by 'collect --output'",
    )

    run = subparsers.add_parser(
        "run",
        help="Collect one day of activities and merge them into the local ledger",
    )
    run.add_argument(
        "--day",
        type=str,
        help="ISO-8601 date (UTC) to collect; defaults to yesterday",
    )

    return parser.parse_args(list(argv))


def _parse_iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid ISO date: {value}") from exc


def _build_window(args: argparse.Namespace) -> DayWindow | None:
    day = getattr(args, "day", None)
    if day is None:
        return None
    return DayWindow.for_day(_parse_iso_date(day))


def _log_sync_result(result: SyncLedgerResult) -> None:
    log.info(
        "Ledger updated: received=%s, inserted=%s, updated=%s, unresolved=%s",
        result.received,
        result.inserted,
        result.updated,
        result.summary.unresolved,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        window = _build_window(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "collect":
            events = collect_activities(window=window)
            if parsed_args.output is not None:
                dump_events(events, parsed_args.output)
                log.info("Wrote %s events to %s", len(events), parsed_args.output)
            else:
                deliver_activities(events)
        elif parsed_args.command == "reconcile":
            events = load_events(parsed_args.input)
            _log_sync_result(reconcile_activities(events))
        elif parsed_args.command == "run":
            events = collect_activities(window=window)
            _log_sync_result(reconcile_activities(events))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during activity sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
