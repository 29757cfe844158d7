"""Daily pages on disk: finding the latest one and writing new ones."""

import re
from pathlib import Path
from typing import Optional

from logger_config import setup_logger

logger = setup_logger(__name__, 'journal.log')

FILENAME_JUNK = re.compile(r"[()\[\]?']")


def normalize_filename(raw: str) -> str:
    """Title to file-name part: "What's the plan?" -> "whats-the-plan"."""
    lower = raw.lower().replace(" ", "-")
    return FILENAME_JUNK.sub("", lower)


class Journal:
    """A directory of markdown pages named `<YYYY-MM-DD>-<title>.md`."""

    def __init__(self, location: Path):
        self.location = Path(location).expanduser()

    def latest_entry(self) -> Optional[str]:
        """Markdown of the newest page, or None if there is none.

        Pages sort by name, and names start with the date.
        """
        entries = sorted(p for p in self.location.iterdir() if p.is_file() and p.suffix == ".md")
        if not entries:
            logger.info(f"No journal entries found in {self.location}")
            return None

        latest = entries[-1]
        logger.info(f"Latest entry found at {latest}")
        return latest.read_text(encoding="utf-8")

    def add_entry(self, name: str, text: str) -> Path:
        path = self.location / name
        path.write_text(text, encoding="utf-8")
        logger.info(f"Wrote journal entry {path}")
        return path
