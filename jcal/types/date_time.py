"""Library for parsing DATE-TIME values."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jcal.compat import lenient_compat
from jcal.time import Time

from .data_types import DATA_TYPE
from .date import date_from_ical

if TYPE_CHECKING:
    from jcal.property import Property

_LOGGER = logging.getLogger(__name__)


def date_time_from_ical(value: str) -> str:
    """Convert an rfc5545 DATE-TIME into the jCal form.

    For example 20120901T130000Z becomes 2012-09-01T13:00:00Z.
    """
    result = (
        f"{value[0:4]}-{value[4:6]}-{value[6:8]}"
        f"T{value[9:11]}:{value[11:13]}:{value[13:15]}"
    )
    if value[15:16] == "Z":
        result += "Z"
    return result


@DATA_TYPE.register("date-time")
class DateTimeDecoder:
    """Decode an rfc5545 DATE-TIME."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Parse a rfc5545 date-time into a jCal date-time string."""
        if lenient_compat.is_lenient_dates_enabled() and len(value) == 8:
            # This is probably a date, e.g. 20120901
            return date_from_ical(value)
        return date_time_from_ical(value)

    @classmethod
    def __decorate__(cls, value: str, prop: Property | None = None) -> Time:
        """Create a Time from a jCal date-time string.

        The timezone is UTC for a trailing 'Z', otherwise it is resolved from
        the TZID parameter of the property.
        """
        if lenient_compat.is_lenient_dates_enabled():
            return Time.from_string(value, prop)
        return Time.from_date_time_string(value, prop)
