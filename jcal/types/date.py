"""Library for parsing DATE values."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jcal.compat import lenient_compat
from jcal.time import Time

from .data_types import DATA_TYPE

if TYPE_CHECKING:
    from jcal.property import Property

_LOGGER = logging.getLogger(__name__)


def date_from_ical(value: str) -> str:
    """Convert an rfc5545 DATE into the jCal form e.g. 20120901 to 2012-09-01."""
    return f"{value[0:4]}-{value[4:6]}-{value[6:8]}"


@DATA_TYPE.register("date")
class DateDecoder:
    """Decode an rfc5545 DATE."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Parse a rfc5545 date into a jCal date string."""
        if lenient_compat.is_lenient_dates_enabled() and len(value) >= 15:
            # This is probably a date-time, e.g. 20120901T130000Z
            from .date_time import date_time_from_ical

            return date_time_from_ical(value)
        return date_from_ical(value)

    @classmethod
    def __decorate__(cls, value: str, prop: Property | None = None) -> Time:
        """Create a date Time from a jCal date string."""
        if lenient_compat.is_lenient_dates_enabled():
            return Time.from_string(value, prop)
        return Time.from_date_string(value)
