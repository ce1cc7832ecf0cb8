"""Tests for RECUR data types."""

import datetime
from typing import Any

import pytest

from jcal.exceptions import CalendarParseError
from jcal.parsing.property import ParsedProperty
from jcal.property import Property
from jcal.time import MONDAY, SUNDAY
from jcal.types import Frequency, Recur
from jcal.types.recur import (
    ical_day_to_numeric_day,
    numeric_day_to_ical_day,
    string_to_data,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (
            "FREQ=WEEKLY;BYDAY=MO,WE;UNTIL=20220930",
            {"freq": "WEEKLY", "byday": ["MO", "WE"], "until": "2022-09-30"},
        ),
        (
            "FREQ=YEARLY;BYMONTH=4,5;BYDAY=-1SU",
            {"freq": "YEARLY", "bymonth": [4, 5], "byday": "-1SU"},
        ),
        (
            "FREQ=DAILY;COUNT=10;UNTIL=20221231T235959Z",
            {"freq": "DAILY", "count": 10, "until": "2022-12-31T23:59:59Z"},
        ),
        ("FREQ=DAILY;INTERVAL=0", {"freq": "DAILY", "interval": 1}),
        ("FREQ=DAILY;INTERVAL=-3", {"freq": "DAILY", "interval": 1}),
        ("FREQ=WEEKLY;WKST=SU", {"freq": "WEEKLY", "wkst": 1}),
        ("FREQ=WEEKLY;WKST=MO", {"freq": "WEEKLY", "wkst": 2}),
        ("FREQ=MONTHLY;BYMONTHDAY=-31,31", {"freq": "MONTHLY", "bymonthday": [-31, 31]}),
        ("FREQ=DAILY;BYSECOND=60", {"freq": "DAILY", "bysecond": 60}),
        ("FREQ=DAILY;;X-NAME=value", {"freq": "DAILY", "x-name": "value"}),
        ("", {}),
    ],
)
def test_string_to_data(value: str, expected: dict[str, Any]) -> None:
    """Test parsing a recurrence rule into the jCal dictionary form."""
    assert string_to_data(value) == expected


@pytest.mark.parametrize(
    "value,match",
    [
        ("FREQ=FORTNIGHTLY", "Invalid frequency 'FORTNIGHTLY'"),
        ("FREQ=daily", "Invalid frequency"),
        ("FREQ=DAILY;BYMONTH=13", "BYMONTH: invalid value '13' must be between 1 and 12"),
        ("FREQ=DAILY;BYMONTH=0", "BYMONTH: invalid value"),
        ("FREQ=DAILY;BYHOUR=24", "BYHOUR: invalid value"),
        ("FREQ=DAILY;BYMINUTE=60", "BYMINUTE: invalid value"),
        ("FREQ=DAILY;BYYEARDAY=367", "BYYEARDAY: invalid value"),
        ("FREQ=DAILY;BYWEEKNO=-54", "BYWEEKNO: invalid value"),
        ("FREQ=DAILY;BYSETPOS=abc", "Could not extract integer"),
        ("FREQ=DAILY;BYDAY=XX", "Invalid BYDAY value 'XX'"),
        ("FREQ=DAILY;BYDAY=54MO", "Invalid BYDAY value"),
        ("FREQ=DAILY;WKST=XX", "Invalid WKST value 'XX'"),
        ("FREQ=DAILY;COUNT=abc", "Could not extract integer"),
    ],
)
def test_invalid_rule(value: str, match: str) -> None:
    """Test recurrence rules that can't be parsed."""
    with pytest.raises(CalendarParseError, match=match):
        string_to_data(value)


@pytest.mark.parametrize(
    "day,week_start,expected",
    [
        ("SU", SUNDAY, 1),
        ("MO", SUNDAY, 2),
        ("SA", SUNDAY, 7),
        ("MO", MONDAY, 1),
        ("SU", MONDAY, 7),
    ],
)
def test_day_numbers(day: str, week_start: int, expected: int) -> None:
    """Test converting between day names and day numbers."""
    assert ical_day_to_numeric_day(day, week_start) == expected
    assert numeric_day_to_ical_day(expected, week_start) == day


def test_from_rrule() -> None:
    """Test creating a Recur model from a rule."""
    recur = Recur.from_rrule(
        "FREQ=WEEKLY;INTERVAL=2;BYDAY=MO,TU;WKST=SU;UNTIL=20220930T000000Z;X-FOO=bar"
    )
    assert recur.freq == Frequency.WEEKLY
    assert recur.interval == 2
    assert recur.count is None
    assert recur.wkst == SUNDAY
    assert recur.parts == {"BYDAY": ["MO", "TU"]}
    assert recur.extras == {"x-foo": "bar"}
    assert str(recur.until) == "2022-09-30T00:00:00Z"
    assert recur.as_jcal() == {
        "freq": "WEEKLY",
        "interval": 2,
        "byday": ["MO", "TU"],
        "until": "2022-09-30T00:00:00Z",
        "wkst": "SU",
        "x-foo": "bar",
    }


def test_from_data_with_names() -> None:
    """Test creating a Recur from a dictionary with a day name and a string interval."""
    recur = Recur.from_data({"freq": "DAILY", "interval": "3", "wkst": "MO", "bymonth": 2})
    assert recur.interval == 3
    assert recur.wkst == MONDAY
    assert recur.parts == {"BYMONTH": [2]}
    assert recur.as_jcal() == {"freq": "DAILY", "interval": 3, "bymonth": 2}


def test_interval_at_least_one() -> None:
    """Test an interval less than one is treated as one."""
    assert Recur(freq=Frequency.DAILY, interval=0).interval == 1


def test_decorate() -> None:
    """Test a recurrence rule property is decorated into a Recur."""
    prop = Property(ParsedProperty.from_ics("RRULE:FREQ=MONTHLY;BYMONTHDAY=1,15"))
    assert prop.as_jcal() == [
        "rrule",
        {},
        "recur",
        {"freq": "MONTHLY", "bymonthday": [1, 15]},
    ]
    recur = prop.get_first_value()
    assert isinstance(recur, Recur)
    assert recur.parts == {"BYMONTHDAY": [1, 15]}


@pytest.mark.parametrize(
    "rule,dtstart,expected",
    [
        (
            "FREQ=WEEKLY;COUNT=3",
            datetime.datetime(2022, 8, 29, 9, 0),
            [
                datetime.datetime(2022, 8, 29, 9, 0),
                datetime.datetime(2022, 9, 5, 9, 0),
                datetime.datetime(2022, 9, 12, 9, 0),
            ],
        ),
        (
            "FREQ=MONTHLY;BYDAY=-1FR;COUNT=3",
            datetime.datetime(2022, 1, 1, 9, 0),
            [
                datetime.datetime(2022, 1, 28, 9, 0),
                datetime.datetime(2022, 2, 25, 9, 0),
                datetime.datetime(2022, 3, 25, 9, 0),
            ],
        ),
        (
            "FREQ=DAILY;INTERVAL=2;UNTIL=20220105T090000Z",
            datetime.datetime(2022, 1, 1, 9, 0, tzinfo=datetime.timezone.utc),
            [
                datetime.datetime(2022, 1, 1, 9, 0, tzinfo=datetime.timezone.utc),
                datetime.datetime(2022, 1, 3, 9, 0, tzinfo=datetime.timezone.utc),
                datetime.datetime(2022, 1, 5, 9, 0, tzinfo=datetime.timezone.utc),
            ],
        ),
        (
            "FREQ=DAILY;UNTIL=20220103",
            datetime.date(2022, 1, 1),
            [
                datetime.datetime(2022, 1, 1),
                datetime.datetime(2022, 1, 2),
                datetime.datetime(2022, 1, 3),
            ],
        ),
        (
            "FREQ=YEARLY;BYMONTH=3;BYDAY=2SU;COUNT=2",
            datetime.datetime(2022, 1, 1, 2, 0),
            [
                datetime.datetime(2022, 3, 13, 2, 0),
                datetime.datetime(2023, 3, 12, 2, 0),
            ],
        ),
    ],
)
def test_as_rrule(
    rule: str, dtstart: datetime.datetime | datetime.date, expected: list[Any]
) -> None:
    """Test expanding a recurrence rule with dateutil."""
    recur = Recur.from_rrule(rule)
    assert list(recur.as_rrule(dtstart)) == expected


def test_as_rrule_week_start() -> None:
    """Test the week start changes the expansion of a weekly rule."""
    dtstart = datetime.datetime(1997, 8, 5, 9, 0)
    monday = Recur.from_rrule("FREQ=WEEKLY;INTERVAL=2;COUNT=4;BYDAY=TU,SU;WKST=MO")
    sunday = Recur.from_rrule("FREQ=WEEKLY;INTERVAL=2;COUNT=4;BYDAY=TU,SU;WKST=SU")
    assert [value.day for value in monday.as_rrule(dtstart)] == [5, 10, 19, 24]
    assert [value.day for value in sunday.as_rrule(dtstart)] == [5, 17, 19, 31]


def test_as_rrule_missing_frequency() -> None:
    """Test a rule without a frequency can't be expanded."""
    with pytest.raises(CalendarParseError, match="missing a frequency"):
        Recur.from_rrule("COUNT=3").as_rrule(datetime.datetime(2022, 1, 1))
