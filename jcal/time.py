"""Date and time values decoded from DATE and DATE-TIME properties.

A `Time` holds the calendar fields exactly as they were written in the
content, along with a reference to the `Timezone` they are relative to. A
`Time` without hour, minute and second is a DATE.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exceptions import CalendarParseError
from .timezone import FLOATING, UTC, Timezone
from .util import strict_parse_int

if TYPE_CHECKING:
    from .property import Property

__all__ = [
    "Time",
    "SUNDAY",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "DEFAULT_WEEK_START",
]

_LOGGER = logging.getLogger(__name__)

SUNDAY = 1
MONDAY = 2
TUESDAY = 3
WEDNESDAY = 4
THURSDAY = 5
FRIDAY = 6
SATURDAY = 7

DEFAULT_WEEK_START = MONDAY

ATTR_TZID = "tzid"


@dataclass
class Time:
    """A date or date and time, relative to a timezone."""

    year: int
    month: int
    day: int
    hour: int | None = None
    minute: int | None = None
    second: int | None = None
    zone: Timezone = FLOATING

    @property
    def is_date(self) -> bool:
        """Return True if this is a date without a time of day."""
        return self.hour is None and self.minute is None and self.second is None

    def day_of_week(self, week_start: int = SUNDAY) -> int:
        """Return the day of the week, 1 for the specified week start."""
        # isoweekday is 1 for Monday, 7 for Sunday
        dow = datetime.date(self.year, self.month, self.day).isoweekday() % 7 + 1
        return ((dow - week_start + 7) % 7) + 1

    def as_datetime(self) -> datetime.datetime | datetime.date:
        """Return the value as a python date or datetime.

        A date-time in the floating timezone is a naive datetime.
        """
        if self.is_date:
            return datetime.date(self.year, self.month, self.day)
        return datetime.datetime(
            self.year,
            self.month,
            self.day,
            self.hour or 0,
            self.minute or 0,
            self.second or 0,
            tzinfo=self.zone.as_tzinfo(),
        )

    def __str__(self) -> str:
        """Return the jCal representation e.g. 2015-01-02T03:04:05Z."""
        result = f"{self.year:04}-{self.month:02}-{self.day:02}"
        if not self.is_date:
            result += f"T{self.hour or 0:02}:{self.minute or 0:02}:{self.second or 0:02}"
            if self.zone is UTC:
                result += "Z"
        return result

    @classmethod
    def from_date_time_string(cls, value: str, prop: Property | None = None) -> Time:
        """Create a Time from a jCal date-time string e.g. 2015-01-02T03:04:05.

        When a property is specified, the timezone is resolved from its
        TZID parameter.
        """
        if len(value) < 19:
            raise CalendarParseError(f"Invalid date-time value: '{value}'")
        zone = FLOATING
        if value[19:20] == "Z":
            zone = UTC
        elif prop is not None and (tzid := prop.get_parameter(ATTR_TZID)):
            if isinstance(tzid, str) and (found := prop.timezones.get(tzid)):
                zone = found
            else:
                _LOGGER.debug("Timezone '%s' is not registered, using floating", tzid)
        return cls(
            year=strict_parse_int(value[0:4]),
            month=strict_parse_int(value[5:7]),
            day=strict_parse_int(value[8:10]),
            hour=strict_parse_int(value[11:13]),
            minute=strict_parse_int(value[14:16]),
            second=strict_parse_int(value[17:19]),
            zone=zone,
        )

    @classmethod
    def from_date_string(cls, value: str) -> Time:
        """Create a Time from a jCal date string e.g. 2015-01-02.

        Dates have no timezone, so a trailing 'Z' is ignored.
        """
        return cls(
            year=strict_parse_int(value[0:4]),
            month=strict_parse_int(value[5:7]),
            day=strict_parse_int(value[8:10]),
        )

    @classmethod
    def from_string(cls, value: str, prop: Property | None = None) -> Time:
        """Create a Time from a jCal date or date-time string."""
        if len(value) > 10:
            return cls.from_date_time_string(value, prop)
        return cls.from_date_string(value)
