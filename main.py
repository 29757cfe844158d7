#!/usr/bin/env python3
"""Command line entry point for the journal tool.

Commands:
    journal new TITLE [--stdout]
    journal reminders new (--on EXPR | --every EXPR) MESSAGE
    journal reminders list
    journal reminders delete INDEX
    journal config show

Exit codes: 0 success, 1 unexpected failure, 2 command line usage (argparse),
3 unparseable date/recurrence, 4 invalid value, 5 reminder number out of
range, 6 storage failure, 7 configuration problem.
"""

import argparse
import asyncio
import os
import shlex
import subprocess
import sys
import textwrap
from pathlib import Path
from typing import Callable, List, Optional

from clock import Clock, WallClock
from config import Settings, load_settings
from database import store_path
from exceptions import ConfigError, JournalError
from journal import Journal, normalize_filename
from logger_config import setup_logger
from reminders import ReminderService
from rendering import render
from schemas import ParseMode, ReminderRow
from template import compose_day

__version__ = "0.1.0"

logger = setup_logger(__name__, 'journal.log')

TABLE_HEADERS = ("Nr", "Date", "Reminders")

Opener = Callable[[Path], None]


def format_table(rows: List[ReminderRow]) -> str:
    """Boxed table with the columns Nr, Date and Reminders."""
    cells = [TABLE_HEADERS] + [(str(row.index), row.schedule, row.message) for row in rows]
    widths = [max(len(cell[column]) for cell in cells) for column in range(len(TABLE_HEADERS))]

    border = "+" + "+".join("-" * (width + 2) for width in widths) + "+"

    def line(cell):
        return "|" + "|".join(f" {value.ljust(width)} " for value, width in zip(cell, widths)) + "|"

    out = [border, line(cells[0]), border]
    for cell in cells[1:]:
        out.append(line(cell))
        out.append(border)
    return "\n".join(out)


def open_in_editor(path: Path) -> None:
    """Open a freshly written page in $EDITOR; without one, only the path is printed.

    Raises:
        ConfigError: If the editor command cannot be started
    """
    editor = os.environ.get("EDITOR", "").strip()
    if not editor:
        logger.info("EDITOR is not set, not opening the page")
        return

    command = shlex.split(editor) + [str(path)]
    try:
        result = subprocess.run(command)
    except OSError as e:
        raise ConfigError(f"Could not start editor '{editor}': {e}") from e

    if result.returncode != 0:
        logger.warning(f"Editor '{editor}' exited with {result.returncode}")


def _reminder_service(settings: Settings, clock: Clock) -> Optional[ReminderService]:
    if not settings.reminders_enabled:
        print("No reminder configuration set. Please add it first")
        return None
    return ReminderService(store_path(settings.journal_dir), clock)


def cmd_new(args: argparse.Namespace, settings: Settings, clock: Clock) -> int:
    if not settings.journal_dir.is_dir():
        raise ConfigError(f"Journal directory {settings.journal_dir} does not exist")

    today = clock.today()
    page = asyncio.run(compose_day(settings, args.title, today))

    if args.write_to_stdout:
        print(page, end="")
        return 0

    filename = f"{today.isoformat()}-{normalize_filename(args.title)}.md"
    path = Journal(settings.journal_dir).add_entry(filename, page)
    print(path)
    args.opener(path)
    return 0


def cmd_reminders_new(args: argparse.Namespace, settings: Settings, clock: Clock) -> int:
    service = _reminder_service(settings, clock)
    if service is None:
        return 0

    if args.on is not None:
        reminder = service.new(args.on, ParseMode.ONE_OFF, args.message)
    else:
        reminder = service.new(args.every, ParseMode.RECURRING, args.message)

    print(f"Added reminder '{reminder.message}' ({render(reminder.schedule)})")
    return 0


def cmd_reminders_list(args: argparse.Namespace, settings: Settings, clock: Clock) -> int:
    service = _reminder_service(settings, clock)
    if service is None:
        return 0

    print(format_table(service.list()))
    return 0


def cmd_reminders_delete(args: argparse.Namespace, settings: Settings, clock: Clock) -> int:
    service = _reminder_service(settings, clock)
    if service is None:
        return 0

    removed = service.delete(args.index)
    remaining = len(service.list())
    print(f"Deleted reminder {args.index}: '{removed.message}' ({remaining} left)")
    return 0


def cmd_config_show(args: argparse.Namespace, settings: Settings, clock: Clock) -> int:
    print(settings.to_yaml(), end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="journal",
        description="Daily markdown journal with carried-over TODOs, pull requests and reminders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """
            Examples:
              journal new "Planning day"
              journal reminders new --on Monday "Send report"
              journal reminders new --every 3.days "Check in with team Apollo"
              journal reminders list
              journal reminders delete 1
            """
        ).strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_new = sub.add_parser("new", help="Create the page for today")
    p_new.add_argument("title", help="Title of the page")
    p_new.add_argument(
        "-s", "--stdout", dest="write_to_stdout", action="store_true", help="Print instead of writing a file"
    )
    p_new.set_defaults(func=cmd_new)

    p_reminders = sub.add_parser("reminders", help="Manage reminders")
    reminders_sub = p_reminders.add_subparsers(dest="reminders_cmd", required=True)

    p_rem_new = reminders_sub.add_parser("new", help="Add a reminder")
    when = p_rem_new.add_mutually_exclusive_group(required=True)
    when.add_argument("--on", metavar="EXPR", help="Once: a weekday (Monday) or a date (12.Mar, 12.Mar.2024)")
    when.add_argument("--every", metavar="EXPR", help="Recurring: a weekday (Monday) or an interval (3.days, 2.weeks)")
    p_rem_new.add_argument("message", help="What to be reminded of")
    p_rem_new.set_defaults(func=cmd_reminders_new)

    p_rem_list = reminders_sub.add_parser("list", help="Show all reminders")
    p_rem_list.set_defaults(func=cmd_reminders_list)

    p_rem_delete = reminders_sub.add_parser("delete", help="Delete a reminder by its number in 'list'")
    p_rem_delete.add_argument("index", type=int, help="Number shown by 'journal reminders list'")
    p_rem_delete.set_defaults(func=cmd_reminders_delete)

    p_config = sub.add_parser("config", help="Inspect the configuration")
    config_sub = p_config.add_subparsers(dest="config_cmd", required=True)
    p_show = config_sub.add_parser("show", help="Show the current configuration that is loaded")
    p_show.set_defaults(func=cmd_config_show)

    return parser


def main(
    argv: Optional[List[str]] = None,
    clock: Optional[Clock] = None,
    opener: Optional[Opener] = None,
) -> int:
    """Run one command and return its exit code.

    `clock` and `opener` replace the wall clock and the $EDITOR launch in tests.
    """
    args = build_parser().parse_args(argv)
    args.opener = opener or open_in_editor

    try:
        settings = load_settings()
        return args.func(args, settings, clock or WallClock())
    except JournalError as e:
        logger.info(f"Command failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
