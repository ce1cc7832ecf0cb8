"""Library for parsing PERIOD values."""

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING, Any, Optional

from pydantic import model_validator

from jcal.compat import lenient_compat
from jcal.exceptions import CalendarParseError
from jcal.time import Time

from .data_types import DATA_TYPE
from .date_time import DateTimeDecoder
from .duration import Duration, is_duration_string
from .model import ValueModel

if TYPE_CHECKING:
    from jcal.property import Property

_LOGGER = logging.getLogger(__name__)


@DATA_TYPE.register("period")
class Period(ValueModel):
    """A value with a precise period of time."""

    start: Time
    """Start of the period of time."""

    end: Optional[Time] = None
    """End of the period of the time (duration is implicit)."""

    duration: Optional[Duration] = None
    """Duration of the period of time (end time is implicit)."""

    @model_validator(mode="after")
    def check_end_or_duration(self) -> Period:
        """Verify the period does not have both an end and a duration."""
        if self.end is not None and self.duration is not None:
            raise ValueError("Period cannot have both an end and a duration")
        return self

    @property
    def end_value(self) -> datetime.datetime | datetime.date:
        """A computed end value based on either end or duration."""
        if self.end is not None:
            return self.end.as_datetime()
        if self.duration is None:
            raise CalendarParseError("Invalid period missing both end and duration")
        return self.start.as_datetime() + self.duration.as_timedelta()

    def as_jcal(self) -> list[str]:
        """Return the jCal representation e.g. ["2012-09-01T13:00:00", "PT1H"]."""
        return [str(self.start), str(self.end if self.end is not None else self.duration)]

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> list[str]:
        """Split the period into its jCal start and end or duration parts."""
        parts = value.split("/")
        parts[0] = DateTimeDecoder.__from_ical__(parts[0])
        if len(parts) > 1 and not is_duration_string(parts[1]):
            parts[1] = DateTimeDecoder.__from_ical__(parts[1])
        return parts

    @classmethod
    def __decorate__(cls, value: Any, prop: Property | None = None) -> Period:
        """Create a Period from the jCal parts."""
        if len(value) != 2:
            raise CalendarParseError(f"Period did not have two time values: {value}")
        start_value, end_value = value
        if lenient_compat.is_lenient_dates_enabled():
            start = Time.from_string(start_value, prop)
        else:
            start = Time.from_date_time_string(start_value, prop)
        if is_duration_string(end_value):
            return cls(start=start, duration=Duration.from_string(end_value))
        if lenient_compat.is_lenient_dates_enabled():
            end = Time.from_string(end_value, prop)
        else:
            end = Time.from_date_time_string(end_value, prop)
        return cls(start=start, end=end)
