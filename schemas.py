"""Pydantic schemas for the journal reminder engine.

This module defines the schedule types, the reminder record and the on-disk
document that holds them.
IMPORTANT: A Schedule is a closed union discriminated by its `type` field.
Every consumer (occurrences, rendering) must handle all three variants.
"""

from datetime import date
from enum import Enum
from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import Annotated


class Weekday(str, Enum):
    """Days of the week, in `date.weekday()` order."""
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def number(self) -> int:
        """0 for Monday through 6 for Sunday, matching `date.weekday()`."""
        return list(Weekday).index(self)

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        """Look up a weekday by its full name, ignoring case.

        Raises:
            KeyError: If `name` is not a weekday
        """
        return cls[name.strip().upper()]


class IntervalUnit(str, Enum):
    """Units an interval recurrence can be counted in."""
    DAY = "Day"
    WEEK = "Week"

    @property
    def days(self) -> int:
        return 7 if self is IntervalUnit.WEEK else 1


class ParseMode(str, Enum):
    """How an expression is interpreted: `--on` versus `--every`."""
    ONE_OFF = "on"
    RECURRING = "every"


class OneOff(BaseModel):
    """Fires exactly once, on a concrete calendar date."""
    model_config = ConfigDict(frozen=True)

    type: Literal["one_off"] = "one_off"
    on: date


class EveryWeekday(BaseModel):
    """Fires on every occurrence of a weekday."""
    model_config = ConfigDict(frozen=True)

    type: Literal["every_weekday"] = "every_weekday"
    weekday: Weekday


class EveryInterval(BaseModel):
    """Fires every `count` days or weeks, measured from the reminder's anchor date."""
    model_config = ConfigDict(frozen=True)

    type: Literal["every_interval"] = "every_interval"
    count: int = Field(..., ge=1, description="Number of units between occurrences")
    unit: IntervalUnit


Schedule = Annotated[Union[OneOff, EveryWeekday, EveryInterval], Field(discriminator="type")]


class Reminder(BaseModel):
    """A single stored reminder.

    `id` is assigned once at creation and never reused. Display numbers shown by
    `reminders list` are positional and are NOT stored here.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable unique reminder ID (UUID)")
    message: str = Field(..., min_length=1, description="What to be reminded of")
    schedule: Schedule
    anchor_date: date = Field(..., description="Date the schedule is measured from (creation date)")

    @field_validator("message")
    def _not_blank(cls, v: str):  # noqa: N805
        if not v.strip():
            raise ValueError("message must not be blank")
        return v


class ReminderDocument(BaseModel):
    """Top-level structure of the persisted reminders file."""

    reminders: List[Reminder] = Field(default_factory=list)


class ReminderRow(BaseModel):
    """One row of `reminders list` output."""
    model_config = ConfigDict(frozen=True)

    index: int
    schedule: str
    message: str
