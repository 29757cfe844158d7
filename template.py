"""Composition of a new day page.

The page is a `# {title} on {date}` header followed by the enabled sections:
notes, carried-over TODOs, pull requests and today's reminders.
Empty pull request and reminder sections are left out.
"""

from datetime import date
from typing import List, Optional

import httpx

from config import Settings
from database import store_path
from journal import Journal
from logger_config import setup_logger
from pull_requests import fetch_pull_requests, render_pull_requests
from reminders import ReminderService
from todo import find_open_todos, render_todos

logger = setup_logger(__name__, 'journal.log')

REMINDERS_HEADER = "## Your reminders for today:"


def render_reminders(messages: List[str]) -> str:
    lines = "\n".join(f"* [ ] {message}" for message in messages)
    return f"{REMINDERS_HEADER}\n\n{lines}\n"


def render_day(title: str, today: date, sections: List[str]) -> str:
    """Join the header and non-empty sections with one blank line between them."""
    parts = [f"# {title} on {today.isoformat()}"]
    parts.extend(section.strip("\n") for section in sections if section and section.strip())
    return "\n\n".join(parts) + "\n"


async def compose_day(
    settings: Settings,
    title: str,
    today: date,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Build the markdown for a new day page.

    Args:
        settings: Loaded configuration
        title: Page title
        today: Date the page is for
        transport: Optional httpx transport for the GitHub client (tests)

    Returns:
        str: Complete page markdown
    """
    journal = Journal(settings.journal_dir)
    sections = []

    if settings.notes.enabled:
        sections.append(settings.notes.template)

    if settings.todo.enabled:
        previous = journal.latest_entry()
        todos = find_open_todos(previous) if previous else []
        sections.append(render_todos(todos, settings.todo.template))

    pull_requests = settings.pull_requests
    if pull_requests is not None and pull_requests.enabled:
        prs = await fetch_pull_requests(pull_requests, transport=transport)
        if prs:
            sections.append(render_pull_requests(prs, pull_requests.template))
        elif prs is None:
            logger.warning("Leaving out the pull request section")

    if settings.reminders_enabled:
        service = ReminderService(store_path(settings.journal_dir))
        due = service.due_reminders(today)
        if due:
            sections.append(render_reminders(due))

    return render_day(title, today, sections)
