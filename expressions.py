"""Parser for human-written reminder dates and recurrences.

Supported expressions (names are case-insensitive):
- A weekday name, e.g. "Monday"
- A day and month, e.g. "12.Mar" or "12.Mar.2024"
- An interval, e.g. "3.days" or "2.weeks" (recurring only)

IMPORTANT: One-off weekdays are resolved to a concrete date here, at creation
time. A one-off "Monday" typed on a Monday means the NEXT Monday, never today.
"""

import re
from datetime import date, timedelta

from exceptions import ParseError
from schemas import EveryInterval, EveryWeekday, IntervalUnit, OneOff, ParseMode, Schedule, Weekday

MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

DATE_PATTERN = re.compile(r"^(\d{1,2})\.([a-z]{3,4})(?:\.(\d{4}))?$", re.IGNORECASE)
INTERVAL_PATTERN = re.compile(r"^(\d+)\.(day|days|week|weeks)$", re.IGNORECASE)


def next_weekday_after(today: date, weekday: Weekday) -> date:
    """First date strictly after `today` that falls on `weekday`."""
    start = today + timedelta(days=1)
    return start + timedelta(days=(weekday.number - start.weekday()) % 7)


def _parse_weekday(raw: str, mode: ParseMode, today: date) -> Schedule:
    weekday = Weekday.from_name(raw)
    if mode is ParseMode.RECURRING:
        return EveryWeekday(weekday=weekday)
    return OneOff(on=next_weekday_after(today, weekday))


def _parse_date(raw: str, match: re.Match, mode: ParseMode, today: date) -> Schedule:
    day_text, month_text, year_text = match.groups()

    month = MONTHS.get(month_text.lower())
    if month is None:
        raise ParseError(raw, f"'{month_text}' is not a month (use e.g. Jan, Feb, Sept)")

    year = int(year_text) if year_text else today.year
    try:
        on = date(year, month, int(day_text))
    except ValueError as e:
        raise ParseError(raw, str(e)) from e

    if mode is ParseMode.ONE_OFF and on < today:
        if year_text:
            raise ParseError(raw, f"{on.isoformat()} is in the past")
        try:
            on = on.replace(year=year + 1)
        except ValueError as e:
            # 29th of February with no leap year following
            raise ParseError(raw, str(e)) from e

    return OneOff(on=on)


def _parse_interval(raw: str, match: re.Match, mode: ParseMode, today: date) -> Schedule:
    if mode is not ParseMode.RECURRING:
        raise ParseError(raw, "intervals can only be used with --every")

    count = int(match.group(1))
    if count < 1:
        raise ParseError(raw, "the interval must be at least 1")

    unit = IntervalUnit.WEEK if match.group(2).lower().startswith("week") else IntervalUnit.DAY
    if count * unit.days > (date.max - today).days:
        raise ParseError(raw, "the interval reaches past the last supported date")
    return EveryInterval(count=count, unit=unit)


def parse(raw: str, mode: ParseMode, today: date) -> Schedule:
    """Turn a user expression into a Schedule.

    Args:
        raw: The expression as typed by the user
        mode: ParseMode.ONE_OFF for `--on`, ParseMode.RECURRING for `--every`
        today: Reference date for resolving weekdays and missing years

    Returns:
        Schedule: OneOff, EveryWeekday or EveryInterval

    Raises:
        ParseError: If no rule matches; carries the original string
    """
    text = raw.strip()

    if text.upper() in Weekday.__members__:
        return _parse_weekday(text, mode, today)

    # "3.days" would also fit the date shape, so intervals go first
    match = INTERVAL_PATTERN.match(text)
    if match:
        return _parse_interval(raw, match, mode, today)

    match = DATE_PATTERN.match(text)
    if match:
        return _parse_date(raw, match, mode, today)

    raise ParseError(raw, "expected a weekday (Monday), a date (12.Mar[.2024]) or an interval (3.days)")
