"""CRUD operations for the reminder store.

This module provides add/list/delete and the "due today" query.
IMPORTANT: Display indexes are 1-based positions computed on every call.
Only `Reminder.id` is stable across commands.
"""

import uuid
from datetime import date
from typing import List

from database import ReminderStore
from exceptions import ReminderIndexError, ValidationError
from logger_config import setup_logger
from occurrences import is_due
from rendering import render
from schemas import Reminder, ReminderRow, Schedule

logger = setup_logger(__name__, 'reminders.log')


def create_reminder(store: ReminderStore, message: str, schedule: Schedule, anchor: date) -> Reminder:
    """Append a new reminder and persist the store.

    Args:
        store: Loaded reminder store
        message: What to be reminded of; surrounding whitespace is dropped
        schedule: Parsed schedule
        anchor: Creation date, used to measure interval recurrences

    Returns:
        Reminder: The stored reminder with its freshly assigned ID

    Raises:
        ValidationError: If the message is empty
        StorageError: If the store cannot be written
    """
    message = (message or "").strip()
    if not message:
        raise ValidationError("message", "a reminder needs some text")

    known_ids = {r.id for r in store.reminders}
    reminder_id = str(uuid.uuid4())
    while reminder_id in known_ids:
        reminder_id = str(uuid.uuid4())

    reminder = Reminder(id=reminder_id, message=message, schedule=schedule, anchor_date=anchor)
    store.reminders.append(reminder)
    store.save()

    logger.info(f"Created reminder {reminder.id}: '{reminder.message}' ({render(schedule)})")
    return reminder


def list_reminders(store: ReminderStore) -> List[ReminderRow]:
    """All reminders in insertion order, numbered from 1.

    Returns:
        List[ReminderRow]: (index, rendered schedule, message) per reminder
    """
    return [
        ReminderRow(index=position, schedule=render(reminder.schedule), message=reminder.message)
        for position, reminder in enumerate(store.reminders, start=1)
    ]


def delete_reminder(store: ReminderStore, index: int) -> Reminder:
    """Remove the reminder currently shown at `index` and persist the store.

    Raises:
        ReminderIndexError: If `index` is outside 1..len(store)
        StorageError: If the store cannot be written
    """
    available = len(store.reminders)
    if index < 1 or index > available:
        raise ReminderIndexError(index, available)

    removed = store.reminders.pop(index - 1)
    store.save()

    logger.info(f"Deleted reminder {removed.id} (was number {index}): '{removed.message}'")
    return removed


def get_due_reminders(store: ReminderStore, today: date) -> List[str]:
    """Messages of reminders that fire on `today`, in store order."""
    due = [r.message for r in store.reminders if is_due(r.schedule, r.anchor_date, today)]
    logger.debug(f"{len(due)} reminder(s) due on {today.isoformat()}")
    return due
