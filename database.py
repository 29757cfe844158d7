"""Persistence for the reminder store.

The store is a single JSON document (see schemas.ReminderDocument) that is
read fully at the start of a command and written back fully on change.
IMPORTANT: Writes go to a temp file in the same directory and are then
renamed over the original, so a crash mid-write leaves the old file intact.
"""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

import pydantic

from exceptions import StorageError
from logger_config import setup_logger
from schemas import Reminder, ReminderDocument

logger = setup_logger(__name__, 'storage.log')

STORE_FILENAME = "reminders.json"


class ReminderStore:
    """Ordered, in-memory view of the persisted reminders.

    Insertion order is preserved; it is the order `reminders list` shows.
    """

    def __init__(self, path: Path, reminders: Optional[List[Reminder]] = None):
        self.path = Path(path)
        self.reminders: List[Reminder] = list(reminders or [])

    def __len__(self) -> int:
        return len(self.reminders)

    def __repr__(self):
        return f"<ReminderStore(path={self.path}, reminders={len(self.reminders)})>"

    @classmethod
    def load(cls, path: Path) -> "ReminderStore":
        """Read the store from disk.

        A missing file is an empty store; a missing directory is an error.

        Raises:
            StorageError: If the directory is missing, the file is unreadable
                or its content does not match the schema
        """
        path = Path(path)
        if not path.parent.is_dir():
            raise StorageError(path, f"directory {path.parent} does not exist")

        if not path.exists():
            logger.debug(f"No reminder store at {path}, starting empty")
            return cls(path)

        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(path, str(e)) from e

        try:
            document = ReminderDocument.model_validate_json(raw)
        except pydantic.ValidationError as e:
            raise StorageError(path, f"file is corrupt ({e.error_count()} problem(s) found)") from e

        logger.debug(f"Loaded {len(document.reminders)} reminder(s) from {path}")
        return cls(path, document.reminders)

    def dump(self) -> str:
        """Serialized form of the store, exactly as it is written to disk."""
        return ReminderDocument(reminders=self.reminders).model_dump_json(indent=2) + "\n"

    def save(self) -> None:
        """Atomically replace the file on disk with the current reminders.

        Raises:
            StorageError: If writing fails; the previous file is left untouched
        """
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(self.dump())
                tmp.flush()
                os.fsync(tmp.fileno())
            # Atomic rename
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(self.path, str(e)) from e

        logger.info(f"Saved {len(self.reminders)} reminder(s) to {self.path}")


def store_path(journal_dir: Path) -> Path:
    """Location of the reminder store inside the journal directory."""
    return Path(journal_dir).expanduser() / STORE_FILENAME


@contextmanager
def get_store(path: Path) -> Iterator[ReminderStore]:
    """Scoped access to the reminder store for one command.

    Yields:
        ReminderStore: Loaded store; mutations persist through crud operations

    Usage:
        with get_store(store_path(settings.dir)) as store:
            crud.list_reminders(store)
    """
    store = ReminderStore.load(path)
    try:
        yield store
    finally:
        logger.debug(f"Released reminder store {store.path}")
