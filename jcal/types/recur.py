"""Implementation of recurrence rules for calendar components.

A RECUR value is first decoded into the jCal dictionary form, where keys are
lowercase, single BY-part values are scalars and the UNTIL date is in its
canonical form:

```python
from jcal.types.recur import string_to_data

string_to_data("FREQ=WEEKLY;BYDAY=MO,WE;UNTIL=20220930")
# {'freq': 'WEEKLY', 'byday': ['MO', 'WE'], 'until': '2022-09-30'}
```

Decorating the value creates a `Recur` model. The model does not expand the
rule itself and relies on the `dateutil.rrule` implementation for the
actual date and time repetition:

```python
import datetime
from jcal.types.recur import Recur

recur = Recur.from_rrule("FREQ=WEEKLY;COUNT=3")
print(list(recur.as_rrule(datetime.datetime(2022, 8, 29, 9, 0))))
```

The above example will output something like this:
```
[datetime.datetime(2022, 8, 29, 9, 0),
 datetime.datetime(2022, 9, 5, 9, 0),
 datetime.datetime(2022, 9, 12, 9, 0)]
```
"""

from __future__ import annotations

import datetime
import enum
import logging
import re
from typing import TYPE_CHECKING, Any, Optional, Union

from dateutil import rrule
from pydantic import Field, field_validator

from jcal.exceptions import CalendarParseError
from jcal.time import (
    DEFAULT_WEEK_START,
    FRIDAY,
    MONDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    TUESDAY,
    WEDNESDAY,
    Time,
)
from jcal.util import strict_parse_int

from .data_types import DATA_TYPE
from .date import date_from_ical
from .date_time import date_time_from_ical
from .model import ValueModel

if TYPE_CHECKING:
    from jcal.property import Property

__all__ = [
    "Frequency",
    "Recur",
    "string_to_data",
    "ical_day_to_numeric_day",
    "numeric_day_to_ical_day",
]

_LOGGER = logging.getLogger(__name__)

VALID_BYDAY_PART = re.compile(
    r"^([+-])?(5[0-3]|[1-4][0-9]|[1-9])?(SU|MO|TU|WE|TH|FR|SA)$"
)
VALID_DAY_NAMES = re.compile(r"^(SU|MO|TU|WE|TH|FR|SA)$")

DOW_MAP = {
    "SU": SUNDAY,
    "MO": MONDAY,
    "TU": TUESDAY,
    "WE": WEDNESDAY,
    "TH": THURSDAY,
    "FR": FRIDAY,
    "SA": SATURDAY,
}
DOW_NAMES = {number: name for name, number in DOW_MAP.items()}

# Inclusive bounds of the numeric BY-parts
PART_RANGES: dict[str, tuple[int, int]] = {
    "BYSECOND": (0, 60),
    "BYMINUTE": (0, 59),
    "BYHOUR": (0, 23),
    "BYMONTHDAY": (-31, 31),
    "BYYEARDAY": (-366, 366),
    "BYWEEKNO": (-53, 53),
    "BYMONTH": (1, 12),
    "BYSETPOS": (-366, 366),
}
BYDAY = "BYDAY"
PARTS = (*PART_RANGES, BYDAY)


class Frequency(str, enum.Enum):
    """Type of recurrence rule."""

    SECONDLY = "SECONDLY"
    """Repeating events based on an interval of a second or more."""

    MINUTELY = "MINUTELY"
    """Repeating events based on an interval of a minute or more."""

    HOURLY = "HOURLY"
    """Repeating events based on an interval of an hour or more."""

    DAILY = "DAILY"
    """Repeating events based on an interval of a day or more."""

    WEEKLY = "WEEKLY"
    """Repeating events based on an interval of a week or more."""

    MONTHLY = "MONTHLY"
    """Repeating events based on an interval of a month or more."""

    YEARLY = "YEARLY"
    """Repeating events based on an interval of a year or more."""

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


RRULE_FREQ = {
    Frequency.SECONDLY: rrule.SECONDLY,
    Frequency.MINUTELY: rrule.MINUTELY,
    Frequency.HOURLY: rrule.HOURLY,
    Frequency.DAILY: rrule.DAILY,
    Frequency.WEEKLY: rrule.WEEKLY,
    Frequency.MONTHLY: rrule.MONTHLY,
    Frequency.YEARLY: rrule.YEARLY,
}
RRULE_WEEKDAY = {
    "MO": rrule.MO,
    "TU": rrule.TU,
    "WE": rrule.WE,
    "TH": rrule.TH,
    "FR": rrule.FR,
    "SA": rrule.SA,
    "SU": rrule.SU,
}


def ical_day_to_numeric_day(value: str, week_start: int = SUNDAY) -> int:
    """Convert a day name e.g. MO into a day number relative to the week start."""
    return ((DOW_MAP[value] - week_start + 7) % 7) + 1


def numeric_day_to_ical_day(number: int, week_start: int = SUNDAY) -> str:
    """Convert a day number relative to the week start into a day name."""
    dow = number + week_start - SUNDAY
    if dow > 7:
        dow -= 7
    return DOW_NAMES[dow]


def _parse_numeric_part(name: str, value: str) -> int:
    low, high = PART_RANGES[name]
    number = strict_parse_int(value)
    if number < low or number > high:
        raise CalendarParseError(
            f"{name}: invalid value '{value}' must be between {low} and {high}"
        )
    return number


def _parse_part(name: str, value: str) -> Union[int, str]:
    if name == BYDAY:
        if not VALID_BYDAY_PART.match(value):
            raise CalendarParseError(f"Invalid BYDAY value '{value}'")
        return value
    return _parse_numeric_part(name, value)


def _parse_until(value: str) -> str:
    if len(value) > 10:
        return date_time_from_ical(value)
    return date_from_ical(value)


def string_to_data(value: str) -> dict[str, Any]:
    """Parse the recurrence rule text into the jCal dictionary form.

    An input rule like 'FREQ=YEARLY;BYMONTH=4,5' is converted into
    {'freq': 'YEARLY', 'bymonth': [4, 5]}. Keys that are not part of the
    rfc5545 grammar are kept as they are, under their lowercase name.
    """
    result: dict[str, Any] = {}
    for part in value.split(";"):
        if not part:
            continue
        key, _, part_value = part.partition("=")
        upper_key = key.upper()
        lower_key = key.lower()
        if upper_key in PARTS:
            values = [_parse_part(upper_key, item) for item in part_value.split(",")]
            result[lower_key] = values[0] if len(values) == 1 else values
        elif upper_key == "FREQ":
            if part_value not in Frequency.__members__:
                allowed = ", ".join(Frequency.__members__)
                raise CalendarParseError(
                    f"Invalid frequency '{part_value}' expected: '{allowed}'"
                )
            result["freq"] = part_value
        elif upper_key == "COUNT":
            result["count"] = strict_parse_int(part_value)
        elif upper_key == "INTERVAL":
            # Some engines generate a zero or negative interval
            result["interval"] = max(strict_parse_int(part_value), 1)
        elif upper_key == "UNTIL":
            result["until"] = _parse_until(part_value)
        elif upper_key == "WKST":
            if not VALID_DAY_NAMES.match(part_value):
                raise CalendarParseError(f"Invalid WKST value '{part_value}'")
            result["wkst"] = ical_day_to_numeric_day(part_value)
        else:
            _LOGGER.debug("Keeping unknown recurrence rule part '%s'", key)
            result[lower_key] = part_value
    return result


@DATA_TYPE.register("recur")
class Recur(ValueModel):
    """A recurrence rule specification.

    The BY-parts are kept under their uppercase rfc5545 names e.g. BYDAY, and
    are always lists.
    """

    freq: Optional[Frequency] = None
    """The frequency of the recurrence."""

    count: Optional[int] = None
    """The number of occurrences to bound the recurrence."""

    until: Optional[Time] = None
    """The inclusive end date of the recurrence, or the last instance."""

    interval: int = 1
    """Interval at which the recurrence rule repeats."""

    wkst: int = MONDAY
    """The day the work week starts, a day number where Sunday is 1."""

    parts: dict[str, list[Union[int, str]]] = Field(default_factory=dict)
    """The BY-parts that expand or limit the occurrences."""

    extras: dict[str, str] = Field(default_factory=dict)
    """Parts of the rule that are not known, keyed by lowercase name."""

    @field_validator("interval")
    @classmethod
    def parse_interval(cls, value: int) -> int:
        """Treat an interval less than 1 as 1."""
        return max(value, 1)

    @classmethod
    def from_data(cls, data: dict[str, Any], prop: Property | None = None) -> Recur:
        """Create a Recur from the jCal dictionary form."""
        fields: dict[str, Any] = {}
        parts: dict[str, list[Union[int, str]]] = {}
        extras: dict[str, str] = {}
        for key, value in data.items():
            upper_key = key.upper()
            if upper_key in PARTS:
                parts[upper_key] = list(value) if isinstance(value, list) else [value]
            elif key in ("freq", "count", "interval", "until", "wkst"):
                fields[key] = value
            else:
                extras[key] = str(value)
        if isinstance(interval := fields.get("interval"), str):
            fields["interval"] = strict_parse_int(interval)
        if isinstance(wkst := fields.get("wkst"), str):
            fields["wkst"] = ical_day_to_numeric_day(wkst)
        if isinstance(until := fields.get("until"), str):
            fields["until"] = Time.from_string(until, prop)
        return cls(**fields, parts=parts, extras=extras)

    @classmethod
    def from_rrule(cls, rrule_str: str) -> Recur:
        """Create a Recur object from an RRULE string."""
        return cls.from_data(string_to_data(rrule_str))

    def as_jcal(self) -> dict[str, Any]:
        """Return the jCal dictionary form of the recurrence rule."""
        result: dict[str, Any] = {}
        if self.freq is not None:
            result["freq"] = str(self.freq)
        if self.count:
            result["count"] = self.count
        if self.interval > 1:
            result["interval"] = self.interval
        for key, values in self.parts.items():
            result[key.lower()] = values[0] if len(values) == 1 else list(values)
        if self.until is not None:
            result["until"] = str(self.until)
        if self.wkst != DEFAULT_WEEK_START:
            result["wkst"] = numeric_day_to_ical_day(self.wkst)
        result.update(self.extras)
        return result

    def as_rrule(self, dtstart: datetime.datetime | datetime.date) -> rrule.rrule:
        """Create a dateutil rrule that expands the recurrence from the start."""
        if self.freq is None:
            raise CalendarParseError("Recurrence rule is missing a frequency")

        byweekday: list[rrule.weekday] | None = None
        if days := self.parts.get(BYDAY):
            byweekday = []
            for day in days:
                if not (match := VALID_BYDAY_PART.match(str(day))):
                    raise CalendarParseError(f"Invalid BYDAY value '{day}'")
                sign, occurrence, name = match.groups()
                weekday = RRULE_WEEKDAY[name]
                if occurrence:
                    weekday = weekday(-int(occurrence) if sign == "-" else int(occurrence))
                byweekday.append(weekday)

        def by_part(name: str) -> list[int] | None:
            if not (values := self.parts.get(name)):
                return None
            return [int(value) for value in values]

        return rrule.rrule(
            freq=RRULE_FREQ[self.freq],
            dtstart=dtstart,
            interval=self.interval,
            # dateutil numbers the days from Monday as 0
            wkst=(self.wkst + 5) % 7,
            count=self.count,
            until=self.until.as_datetime() if self.until is not None else None,
            bysetpos=by_part("BYSETPOS"),
            bymonth=by_part("BYMONTH"),
            bymonthday=by_part("BYMONTHDAY"),
            byyearday=by_part("BYYEARDAY"),
            byweekno=by_part("BYWEEKNO"),
            byweekday=byweekday,
            byhour=by_part("BYHOUR"),
            byminute=by_part("BYMINUTE"),
            bysecond=by_part("BYSECOND"),
            cache=True,
        )

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> dict[str, Any]:
        """Parse the recurrence rule text into the jCal dictionary form."""
        return string_to_data(value)

    @classmethod
    def __decorate__(cls, value: Any, prop: Property | None = None) -> Recur:
        """Create a Recur from the jCal dictionary form."""
        return cls.from_data(value, prop)
