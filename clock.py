"""Source of "today" for everything date-relative."""

from datetime import date
from typing import Protocol


class Clock(Protocol):
    def today(self) -> date:
        ...


class WallClock:
    """The local calendar date of the machine."""

    def today(self) -> date:
        return date.today()
