"""Tests for UTC-OFFSET data types."""

import datetime

import pytest

from jcal.parsing.property import ParsedProperty
from jcal.property import Property
from jcal.types import UtcOffset


@pytest.mark.parametrize(
    "value,expected",
    [
        ("-0500", "-05:00"),
        ("+0130", "+01:30"),
        ("-050030", "-05:00:30"),
    ],
)
def test_utc_offset_from_ical(value: str, expected: str) -> None:
    """Test offsets are converted into the extended format."""
    prop = ParsedProperty.from_ics(f"TZOFFSETFROM:{value}")
    assert prop.as_jcal() == ["tzoffsetfrom", {}, "utc-offset", expected]


def test_decorate() -> None:
    """Test an offset property is decorated into a UtcOffset."""
    prop = Property(ParsedProperty.from_ics("TZOFFSETTO:-0430"))
    offset = prop.get_first_value()
    assert isinstance(offset, UtcOffset)
    assert offset == UtcOffset(hours=4, minutes=30, factor=-1)
    assert offset.to_seconds() == -16200
    assert offset.as_timedelta() == datetime.timedelta(hours=-4, minutes=-30)
    assert str(offset) == "-04:30"


@pytest.mark.parametrize(
    "offset,expected",
    [
        (UtcOffset(hours=5), "+05:00"),
        (UtcOffset(hours=14), "+14:00"),
        (UtcOffset(hours=12, factor=-1), "-12:00"),
        (UtcOffset(hours=15), "-12:00"),
        (UtcOffset(hours=13, factor=-1), "+14:00"),
        (UtcOffset(hours=27), "+00:00"),
        (UtcOffset(hours=5, minutes=90), "+06:30"),
    ],
)
def test_normalize(offset: UtcOffset, expected: str) -> None:
    """Test offsets are wrapped into the range of real world offsets."""
    assert str(offset) == expected


def test_zero_keeps_sign() -> None:
    """Test a negative zero offset is not changed into a positive one."""
    assert str(UtcOffset(factor=-1)) == "-00:00"
    assert str(UtcOffset.from_string("-00:00")) == "-00:00"
    assert str(UtcOffset()) == "+00:00"


def test_from_seconds() -> None:
    """Test creating an offset from seconds, truncated to the minute."""
    assert str(UtcOffset.from_seconds(-18000)) == "-05:00"
    assert str(UtcOffset.from_seconds(19859)) == "+05:30"


def test_compare() -> None:
    """Test offsets are ordered by their value in seconds."""
    west = UtcOffset.from_string("-08:00")
    east = UtcOffset.from_string("+01:00")
    assert west.compare(east) == -1
    assert east.compare(west) == 1
    assert west.compare(UtcOffset(hours=8, factor=-1)) == 0
    assert west < east
    assert east >= west
    assert sorted([east, west]) == [west, east]
