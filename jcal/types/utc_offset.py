"""Library for parsing UTC-OFFSET values."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jcal.util import strict_parse_int

from .data_types import DATA_TYPE, VCARD3_DATA_TYPE

if TYPE_CHECKING:
    from jcal.property import Property

# Offsets wrap around when the world ends: the hour after UTC+14:00 is
# UTC-12:00, so the full range is 27 hours.
_MIN_SECONDS = -12 * 3600
_MAX_SECONDS = 14 * 3600
_RANGE_SECONDS = 27 * 3600


def utc_offset_from_ical(value: str) -> str:
    """Convert -0500 or -050000 into the jCal form -05:00 or -05:00:00."""
    if len(value) < 6:
        return f"{value[0:3]}:{value[3:5]}"
    return f"{value[0:3]}:{value[3:5]}:{value[5:7]}"


@DATA_TYPE.register("utc-offset")
@dataclass
class UtcOffset:
    """Contains an offset from UTC to local time."""

    hours: int = 0
    """The hours in the utc-offset."""

    minutes: int = 0
    """The minutes in the utc-offset."""

    factor: int = 1
    """The sign of the utc offset, 1 for positive offset, -1 for negative."""

    def __post_init__(self) -> None:
        """Normalize the offset into the range (-12:00, +14:00]."""
        seconds = self.to_seconds()
        factor = self.factor
        while seconds < _MIN_SECONDS:
            seconds += _RANGE_SECONDS
        while seconds > _MAX_SECONDS:
            seconds -= _RANGE_SECONDS
        self._from_seconds(seconds)
        # Avoid changing the sign of a zero offset
        if seconds == 0:
            self.factor = factor

    def _from_seconds(self, seconds: int) -> None:
        """Set the fields from seconds, truncated to the minute."""
        secs = abs(seconds)
        self.factor = -1 if seconds < 0 else 1
        self.hours = secs // 3600
        secs -= self.hours * 3600
        self.minutes = secs // 60

    @classmethod
    def from_seconds(cls, seconds: int) -> UtcOffset:
        """Create a UtcOffset from a number of seconds."""
        secs = abs(seconds)
        return cls(
            hours=secs // 3600,
            minutes=secs % 3600 // 60,
            factor=-1 if seconds < 0 else 1,
        )

    @classmethod
    def from_string(cls, value: str) -> UtcOffset:
        """Create a UtcOffset from the jCal form e.g. -05:00."""
        return cls(
            hours=strict_parse_int(value[1:3]),
            minutes=strict_parse_int(value[4:6]),
            factor=1 if value[0:1] == "+" else -1,
        )

    def to_seconds(self) -> int:
        """Convert the offset to a value in seconds."""
        return self.factor * (60 * self.minutes + 3600 * self.hours)

    def as_timedelta(self) -> datetime.timedelta:
        """Return the offset as a python timedelta."""
        return datetime.timedelta(seconds=self.to_seconds())

    def compare(self, other: UtcOffset) -> int:
        """Compare with another offset, returning -1, 0 or 1."""
        a = self.to_seconds()
        b = other.to_seconds()
        return (a > b) - (b > a)

    def __lt__(self, other: UtcOffset) -> bool:
        return self.compare(other) < 0

    def __le__(self, other: UtcOffset) -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: UtcOffset) -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: UtcOffset) -> bool:
        return self.compare(other) >= 0

    def __str__(self) -> str:
        """Return the jCal representation e.g. -05:00."""
        sign = "+" if self.factor == 1 else "-"
        return f"{sign}{self.hours:02}:{self.minutes:02}"

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Convert an rfc5545 offset into the jCal string form."""
        return utc_offset_from_ical(value)

    @classmethod
    def __decorate__(cls, value: Any, prop: Property | None = None) -> UtcOffset:
        """Create a UtcOffset from the jCal string form."""
        return cls.from_string(value)


@VCARD3_DATA_TYPE.register("utc-offset")
class VCard3UtcOffsetDecoder:
    """Decode a vCard 3.0 offset, which is usually already in -05:00 form."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Insert the separator only when the value lacks one."""
        if ":" in value:
            return value
        return utc_offset_from_ical(value)

    @classmethod
    def __decorate__(cls, value: Any, prop: Property | None = None) -> UtcOffset:
        """Create a UtcOffset from the jCal string form."""
        return UtcOffset.from_string(value)
