"""Tests for PERIOD data types."""

import datetime

import pytest

from jcal.exceptions import CalendarParseError
from jcal.parsing.property import ParsedProperty
from jcal.property import Property
from jcal.time import Time
from jcal.timezone import UTC
from jcal.types import Duration, Period


def test_period_with_end() -> None:
    """Test a period with an explicit end."""
    prop = Property(
        ParsedProperty.from_ics("FREEBUSY:19970308T160000Z/19970308T170000Z")
    )
    assert prop.as_jcal() == [
        "freebusy",
        {},
        "period",
        ["1997-03-08T16:00:00Z", "1997-03-08T17:00:00Z"],
    ]
    period = prop.get_first_value()
    assert isinstance(period, Period)
    assert str(period.start) == "1997-03-08T16:00:00Z"
    assert period.duration is None
    assert period.end_value == datetime.datetime(
        1997, 3, 8, 17, 0, 0, tzinfo=datetime.timezone.utc
    )
    assert period.as_jcal() == ["1997-03-08T16:00:00Z", "1997-03-08T17:00:00Z"]


def test_period_with_duration() -> None:
    """Test a period with a start and a duration."""
    prop = Property(ParsedProperty.from_ics("FREEBUSY:19970308T160000Z/PT8H30M"))
    assert prop.parsed.values == [["1997-03-08T16:00:00Z", "PT8H30M"]]
    period = prop.get_first_value()
    assert period.end is None
    assert period.duration == Duration(hours=8, minutes=30)
    assert period.end_value == datetime.datetime(
        1997, 3, 9, 0, 30, 0, tzinfo=datetime.timezone.utc
    )
    assert period.as_jcal() == ["1997-03-08T16:00:00Z", "PT8H30M"]


def test_multiple_periods() -> None:
    """Test a property with a list of periods."""
    prop = Property(
        ParsedProperty.from_ics(
            "FREEBUSY;FBTYPE=BUSY:19970308T160000Z/PT3H,19970308T200000Z/PT1H"
        )
    )
    periods = prop.get_values()
    assert [str(period.start) for period in periods] == [
        "1997-03-08T16:00:00Z",
        "1997-03-08T20:00:00Z",
    ]
    assert prop.get_parameter("fbtype") == "BUSY"


def test_end_and_duration() -> None:
    """Test a period can't have both an end and a duration."""
    start = Time(1997, 3, 8, 16, 0, 0, zone=UTC)
    with pytest.raises(CalendarParseError, match="Failed to parse PERIOD value"):
        Period(
            start=start,
            end=Time(1997, 3, 8, 17, 0, 0, zone=UTC),
            duration=Duration(hours=1),
        )


def test_missing_end_and_duration() -> None:
    """Test the end of a period without an end or a duration."""
    period = Period(start=Time(1997, 3, 8, 16, 0, 0, zone=UTC))
    with pytest.raises(CalendarParseError, match="missing both end and duration"):
        period.end_value


def test_decorate_invalid() -> None:
    """Test decorating a value that does not have two parts."""
    with pytest.raises(CalendarParseError, match="did not have two time values"):
        Period.__decorate__(["1997-03-08T16:00:00Z"])
