"""Occurrence calculation for reminder schedules.

`is_due` is a pure function of the calendar date: there is no "last fired"
state, so asking twice on the same day gives the same answer.
"""

from datetime import date, timedelta
from typing import Optional

from schemas import EveryInterval, EveryWeekday, OneOff, Schedule

ONE_DAY = timedelta(days=1)


def next_due(schedule: Schedule, anchor: date, start: date) -> Optional[date]:
    """Next date the schedule fires, as seen from `start`.

    Args:
        schedule: The reminder's schedule
        anchor: Date interval recurrences are measured from
        start: Reference date

    Returns:
        Optional[date]: For OneOff its date, for EveryWeekday the first
            matching day strictly after `start`, for EveryInterval the first
            `anchor + k * interval` (k >= 0) on or after `start`.
            None when that date lies beyond `date.max`.
    """
    if isinstance(schedule, OneOff):
        return schedule.on

    try:
        if isinstance(schedule, EveryWeekday):
            days_ahead = (schedule.weekday.number - start.weekday() - 1) % 7 + 1
            return start + timedelta(days=days_ahead)

        if isinstance(schedule, EveryInterval):
            step = schedule.count * schedule.unit.days
            if start <= anchor:
                return anchor
            elapsed = (start - anchor).days
            periods = -(-elapsed // step)
            return anchor + timedelta(days=periods * step)
    except OverflowError:
        return None

    raise TypeError(f"Unknown schedule type: {type(schedule).__name__}")


def is_due(schedule: Schedule, anchor: date, today: date) -> bool:
    """Whether the schedule has an occurrence on `today`."""
    if isinstance(schedule, EveryInterval):
        step = schedule.count * schedule.unit.days
        return today >= anchor and (today - anchor).days % step == 0
    return next_due(schedule, anchor, today - ONE_DAY) == today
