"""Shared pytest fixtures: a controllable clock and an isolated configuration."""

import os
import tempfile
from datetime import date, timedelta

import pytest

# Set before any project module creates its log files
os.environ.setdefault("JOURNAL__LOG_DIR", tempfile.mkdtemp(prefix="journal-logs-"))

from schemas import Weekday  # noqa: E402


class ControlledClock:
    """Clock for tests; only moves when told to."""

    def __init__(self, current_date: date):
        self.current_date = current_date

    def today(self) -> date:
        return self.current_date

    def after(self, days: int) -> date:
        assert days > 0
        return self.current_date + timedelta(days=days)

    def advance_by(self, days: int):
        self.current_date += timedelta(days=days)

    def advance_to(self, weekday: Weekday):
        while self.current_date.weekday() != weekday.number:
            self.current_date += timedelta(days=1)


@pytest.fixture
def clock():
    # A Wednesday
    return ControlledClock(date(2022, 1, 5))


@pytest.fixture
def journal_env(tmp_path, monkeypatch):
    """Empty journal directory plus a config file pointing at it.

    Returns a function that (re)writes the YAML config; by default reminders
    are enabled.
    """
    for key in list(os.environ):
        if key.upper().startswith("JOURNAL__"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("EDITOR", raising=False)

    journal_dir = tmp_path / "journal"
    journal_dir.mkdir()
    config_file = tmp_path / ".journal.yaml"
    monkeypatch.setenv("JOURNAL__CONFIG", str(config_file))

    def write_config(extra: str = "reminders:\n  enabled: true\n"):
        config_file.write_text(f"dir: {journal_dir}\n{extra}")
        return journal_dir

    write_config()
    return write_config
