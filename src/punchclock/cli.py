"""Command-line interface for punchclock.

punchclock tracks work time as a log of punch-in / punch-out events.

CONCEPTS:
---------
- EVENT:  One continuous period of work, from a punch-in to a punch-out.
          The most recent event stays open until you punch out.

- SHEET:  The full log of events, stored as JSON
          (default: ~/.punchclock/sheet.json).

- PERIOD: A named window such as today, week or last-month over which
          tracked time is totalled.
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import NoReturn

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from punchclock import __version__
from punchclock.clock import to_utc
from punchclock.tracking import (
    Period,
    SheetError,
    SheetStorage,
    StatusKind,
    TimeTracker,
    format_duration,
    format_instant,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    fmt = "%(name)s: %(message)s" if verbose else "%(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[RichHandler(rich_tracebacks=True, console=console, show_path=verbose)],
    )


def parse_instant(text: str) -> datetime:
    """Parse an ISO 8601 / RFC 3339 timestamp; naive values are UTC."""
    try:
        return to_utc(datetime.fromisoformat(text.strip()))
    except (ValueError, OverflowError):
        raise argparse.ArgumentTypeError(
            f"invalid time '{text}' (expected e.g. 2024-05-01T09:30:00Z)"
        ) from None


def parse_period(text: str) -> Period:
    try:
        return Period.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _make_tracker(args: argparse.Namespace) -> TimeTracker:
    return TimeTracker(SheetStorage(args.sheet) if args.sheet else None)


def cmd_in(args: argparse.Namespace) -> None:
    """Punch in."""
    tracker = _make_tracker(args)
    started = tracker.punch_in(args.at)
    console.print(f"[green]Punched in[/green] at {format_instant(started)}")


def cmd_out(args: argparse.Namespace) -> None:
    """Punch out."""
    tracker = _make_tracker(args)
    stopped = tracker.punch_out(args.at)
    event = tracker.sheet.events[-1]
    console.print(
        f"[green]Punched out[/green] at {format_instant(stopped)} "
        f"({format_duration(stopped - event.start)})"
    )


def cmd_status(args: argparse.Namespace) -> None:
    """Show whether time is currently being tracked."""
    tracker = _make_tracker(args)
    status = tracker.status()

    if status.kind == StatusKind.EMPTY:
        console.print("[yellow]No punches recorded.[/yellow]")
    elif status.kind == StatusKind.PUNCHED_IN:
        elapsed = format_duration(tracker.now() - status.since)
        console.print(
            f"[green]Punched in[/green] since {format_instant(status.since)} ({elapsed})"
        )
    else:
        console.print(f"[blue]Punched out[/blue] since {format_instant(status.since)}")


def cmd_count(args: argparse.Namespace) -> None:
    """Show total tracked time for a period or an explicit range."""
    tracker = _make_tracker(args)

    if args.begin is not None or args.end is not None:
        begin = args.begin
        end = args.end if args.end is not None else tracker.now()
        total = tracker.count_range(begin, end)
        label = f"{format_instant(begin)} to {format_instant(end)}"
    else:
        total = tracker.count_period(args.period)
        label = args.period.label

    console.print(f"[bold]{format_duration(total)}[/bold] tracked ({label})")


def cmd_log(args: argparse.Namespace) -> None:
    """List recorded events."""
    tracker = _make_tracker(args)
    events = tracker.sheet.events

    if not events:
        console.print("[yellow]No punches recorded.[/yellow]")
        return

    now = tracker.now()
    shown = events[-args.limit:] if args.limit > 0 else events

    table = Table(title="Recorded Events")
    table.add_column("#", style="cyan")
    table.add_column("Start", style="white")
    table.add_column("Stop", style="white")
    table.add_column("Duration", style="magenta")

    offset = len(events) - len(shown)
    for i, event in enumerate(shown, start=offset + 1):
        stop = format_instant(event.stop) if event.stop else "[green]running[/green]"
        table.add_row(
            str(i),
            format_instant(event.start),
            stop,
            format_duration(event.effective_stop(now) - event.start),
        )

    console.print(table)


def cmd_version(args: argparse.Namespace) -> None:
    """Show version information."""
    console.print(f"punch v{__version__}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``punch`` command."""
    parser = argparse.ArgumentParser(
        prog="punch",
        description="punchclock - lightweight terminal time tracking",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed output")
    parser.add_argument(
        "--sheet",
        metavar="PATH",
        help="Sheet file to use (default: ~/.punchclock/sheet.json)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # in
    in_parser = subparsers.add_parser("in", help="Start tracking time")
    in_parser.add_argument(
        "--at", type=parse_instant, metavar="TIME",
        help="Punch in at this time instead of now"
    )
    in_parser.set_defaults(func=cmd_in)

    # out
    out_parser = subparsers.add_parser("out", help="Stop tracking time")
    out_parser.add_argument(
        "--at", type=parse_instant, metavar="TIME",
        help="Punch out at this time instead of now"
    )
    out_parser.set_defaults(func=cmd_out)

    # status
    status_parser = subparsers.add_parser("status", help="Show whether time is being tracked")
    status_parser.set_defaults(func=cmd_status)

    # count
    count_parser = subparsers.add_parser(
        "count",
        help="Total tracked time",
        description="Total tracked time for a named period, or between two times.",
    )
    count_parser.add_argument(
        "period", nargs="?", type=parse_period, default=Period.TODAY,
        help=f"One of: {', '.join(p.value for p in Period)} (default: today)"
    )
    count_parser.add_argument(
        "--from", dest="begin", type=parse_instant, metavar="TIME",
        help="Start of an explicit range"
    )
    count_parser.add_argument(
        "--to", dest="end", type=parse_instant, metavar="TIME",
        help="End of an explicit range (default: now)"
    )
    count_parser.set_defaults(func=cmd_count, parser=count_parser)

    # log
    log_parser = subparsers.add_parser("log", help="List recorded events")
    log_parser.add_argument(
        "-n", "--limit", type=int, default=10,
        help="Number of most recent events to show, 0 for all (default: 10)"
    )
    log_parser.set_defaults(func=cmd_log)

    # version
    version_parser = subparsers.add_parser("version", help="Show version information")
    version_parser.set_defaults(func=cmd_version)

    return parser


def main() -> NoReturn:
    """Main entry point for the punch CLI."""
    parser = build_parser()
    args = parser.parse_args()
    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "count" and args.end is not None and args.begin is None:
        args.parser.error("--to requires --from")

    try:
        args.func(args)
    except SheetError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
