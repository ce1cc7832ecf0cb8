"""Library for parsing DURATION values."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jcal.exceptions import CalendarParseError
from jcal.util import parse_int_prefix

from .data_types import DATA_TYPE

if TYPE_CHECKING:
    from jcal.property import Property

DURATION_LETTERS = re.compile(r"[PDWHMTS]")

_UNITS = {
    "W": "weeks",
    "D": "days",
    "H": "hours",
    "M": "minutes",
    "S": "seconds",
}


def is_duration_string(value: str) -> bool:
    """Return True if the value looks like an rfc5545 duration."""
    return value[0:1] == "P" or value[1:2] == "P"


@DATA_TYPE.register("duration")
@dataclass(frozen=True)
class Duration:
    """A duration of time, e.g. -P1DT2H."""

    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    is_negative: bool = False

    def to_seconds(self) -> int:
        """The duration value expressed as a number of seconds."""
        seconds = (
            self.seconds
            + 60 * self.minutes
            + 3600 * self.hours
            + 86400 * self.days
            + 7 * 86400 * self.weeks
        )
        return -seconds if self.is_negative else seconds

    def as_timedelta(self) -> datetime.timedelta:
        """Return the duration as a python timedelta."""
        return datetime.timedelta(seconds=self.to_seconds())

    def __str__(self) -> str:
        """Return the rfc5545 representation of the duration."""
        if self.to_seconds() == 0:
            return "PT0S"
        parts = []
        if self.is_negative:
            parts.append("-")
        parts.append("P")
        if self.weeks:
            parts.append(f"{self.weeks}W")
        if self.days:
            parts.append(f"{self.days}D")
        if self.hours or self.minutes or self.seconds:
            parts.append("T")
            if self.hours:
                parts.append(f"{self.hours}H")
            if self.minutes:
                parts.append(f"{self.minutes}M")
            if self.seconds:
                parts.append(f"{self.seconds}S")
        return "".join(parts)

    @classmethod
    def from_string(cls, value: str) -> Duration:
        """Parse an rfc5545 duration string.

        The text before each letter is the number for that unit. The 'P' may
        be preceded by a sign and 'T' only separates the date and time units.
        There must be a 'P' and at least one unit.
        """
        fields: dict[str, Any] = {}
        chunks = 0
        remaining = value
        while match := DURATION_LETTERS.search(remaining):
            letter = match.group(0)
            numeric = remaining[: match.start()]
            remaining = remaining[match.end() :]
            if letter == "P":
                fields["is_negative"] = numeric == "-"
                chunks += 1
            elif letter in _UNITS:
                if not numeric:
                    raise CalendarParseError(
                        f"Invalid duration value '{value}': Missing number before '{letter}'"
                    )
                if (number := parse_int_prefix(numeric)) is None:
                    raise CalendarParseError(
                        f"Invalid duration value '{value}': Invalid number '{numeric}' before '{letter}'"
                    )
                fields[_UNITS[letter]] = number
                chunks += 1
        if chunks < 2:
            raise CalendarParseError(
                f"Invalid duration value '{value}': Not enough duration components"
            )
        return cls(**fields)

    @classmethod
    def __decorate__(cls, value: Any, prop: Property | None = None) -> Duration:
        """Create a Duration from the duration string."""
        return cls.from_string(value)
