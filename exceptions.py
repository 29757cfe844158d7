"""Error taxonomy for the journal tool.

Every error a user can cause carries the offending input in its message and
a distinct process exit code, so the CLI can report it and stop.
"""


class JournalError(Exception):
    """Base class for all user-facing journal errors."""

    exit_code = 1


class ParseError(JournalError):
    """A date/recurrence expression matched no grammar rule."""

    exit_code = 3

    def __init__(self, raw: str, hint: str = ""):
        self.raw = raw
        message = f"Could not understand '{raw}' as a date or recurrence"
        if hint:
            message = f"{message}: {hint}"
        super().__init__(message)


class ValidationError(JournalError):
    """A value was syntactically fine but not acceptable (e.g. empty message)."""

    exit_code = 4

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class ReminderIndexError(JournalError, IndexError):
    """A display index did not point at an existing reminder."""

    exit_code = 5

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        if available == 0:
            detail = "there are no reminders"
        else:
            detail = f"valid numbers are 1 to {available}"
        super().__init__(f"No reminder number {requested}: {detail}")


class StorageError(JournalError):
    """Reading or writing the reminder store failed."""

    exit_code = 6

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Reminder storage at {path} failed: {reason}")


class ConfigError(JournalError):
    """The configuration could not be found or is invalid."""

    exit_code = 7
