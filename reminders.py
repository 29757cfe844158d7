"""Reminder use-cases: new, list, delete and "what is due today".

Each call is one scoped read (and, for mutations, one atomic write) of the
store file.
"""

from datetime import date
from pathlib import Path
from typing import List, Optional

import crud
import expressions
from clock import Clock, WallClock
from database import get_store
from schemas import ParseMode, Reminder, ReminderRow


class ReminderService:
    """Composes parser, store, calculator and renderer for the CLI and the page composer."""

    def __init__(self, path: Path, clock: Optional[Clock] = None):
        self.path = Path(path)
        self.clock = clock or WallClock()

    def new(self, expression: str, mode: ParseMode, message: str) -> Reminder:
        """Parse `expression` and store a reminder anchored at today.

        Raises:
            ParseError: The expression is not understood; nothing is stored
            ValidationError: The message is empty; nothing is stored
        """
        today = self.clock.today()
        schedule = expressions.parse(expression, mode, today)
        with get_store(self.path) as store:
            return crud.create_reminder(store, message, schedule, today)

    def list(self) -> List[ReminderRow]:
        with get_store(self.path) as store:
            return crud.list_reminders(store)

    def delete(self, index: int) -> Reminder:
        with get_store(self.path) as store:
            return crud.delete_reminder(store, index)

    def due_reminders(self, on: Optional[date] = None) -> List[str]:
        """Messages due on `on` (default: today), for the day page."""
        with get_store(self.path) as store:
            return crud.get_due_reminders(store, on or self.clock.today())
