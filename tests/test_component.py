"""Tests for the Component and Property views of parsed content."""

import textwrap

import pytest

from jcal.component import Component
from jcal.exceptions import CalendarParseError
from jcal.property import Property
from jcal.time import Time
from jcal.timezone import TimezoneRegistry
from jcal.types import Recur

CALENDAR = textwrap.dedent(
    """\
    BEGIN:VCALENDAR
    PRODID:-//example//jcal//EN
    VERSION:2.0
    BEGIN:VEVENT
    UID:event-1
    SUMMARY:First
    DTSTART:20220101T100000Z
    RRULE:FREQ=DAILY;COUNT=3
    CATEGORIES:WORK,MEETING
    BEGIN:VALARM
    ACTION:DISPLAY
    TRIGGER:-PT15M
    END:VALARM
    END:VEVENT
    BEGIN:VEVENT
    UID:event-2
    SUMMARY:Second
    END:VEVENT
    BEGIN:VTODO
    UID:todo-1
    END:VTODO
    END:VCALENDAR
    """
)


@pytest.fixture(name="calendar")
def mock_calendar() -> Component:
    """Fixture for a calendar with events and a to-do."""
    return Component.from_ics(CALENDAR)


def test_component(calendar: Component) -> None:
    """Test reading the properties of a component."""
    assert calendar.name == "vcalendar"
    assert calendar.parent is None
    assert calendar.design_set.name == "icalendar"
    assert calendar.get_first_property_value("prodid") == "-//example//jcal//EN"
    assert calendar.has_property("version")
    assert not calendar.has_property("method")
    assert calendar.get_first_property("method") is None
    assert calendar.get_first_property_value("method") is None
    assert [prop.name for prop in calendar.get_all_properties()] == [
        "prodid",
        "version",
    ]


def test_subcomponents(calendar: Component) -> None:
    """Test reading the subcomponents of a component."""
    events = calendar.get_all_subcomponents("vevent")
    assert [event.get_first_property_value("uid") for event in events] == [
        "event-1",
        "event-2",
    ]
    assert [component.name for component in calendar.get_all_subcomponents()] == [
        "vevent",
        "vevent",
        "vtodo",
    ]
    todo = calendar.get_first_subcomponent("vtodo")
    assert todo is not None
    assert todo.parent is calendar
    assert calendar.get_first_subcomponent("vjournal") is None
    first = calendar.get_first_subcomponent()
    assert first is not None
    assert first.name == "vevent"


def test_nested_components(calendar: Component) -> None:
    """Test components nested more than one level deep."""
    event = calendar.get_first_subcomponent("vevent")
    assert event is not None
    alarm = event.get_first_subcomponent("valarm")
    assert alarm is not None
    assert alarm.parent is event
    assert alarm.design_set is calendar.design_set
    assert alarm.timezones is calendar.timezones
    assert alarm.get_first_property_value("trigger").to_seconds() == -900


def test_decorated_values(calendar: Component) -> None:
    """Test property values are decorated into value objects."""
    event = calendar.get_first_subcomponent("vevent")
    assert event is not None
    dtstart = event.get_first_property_value("dtstart")
    assert isinstance(dtstart, Time)
    assert str(dtstart) == "2022-01-01T10:00:00Z"
    assert isinstance(event.get_first_property_value("rrule"), Recur)
    categories = event.get_first_property("categories")
    assert categories is not None
    assert categories.get_values() == ["WORK", "MEETING"]


def test_views_are_cached(calendar: Component) -> None:
    """Test the same objects are returned for repeated lookups."""
    event = calendar.get_first_subcomponent("vevent")
    assert event is calendar.get_first_subcomponent("vevent")
    assert event is not None
    prop = event.get_first_property("dtstart")
    assert prop is event.get_first_property("dtstart")
    assert prop is not None
    assert prop.get_first_value() is prop.get_first_value()


def test_as_jcal(calendar: Component) -> None:
    """Test the jCal form of a component."""
    todo = calendar.get_first_subcomponent("vtodo")
    assert todo is not None
    assert todo.as_jcal() == ["vtodo", [["uid", {}, "text", "todo-1"]], []]
    assert calendar.as_jcal() == calendar.parsed.as_jcal()


@pytest.mark.parametrize(
    "content,match",
    [
        ("", "found 0"),
        (
            "BEGIN:VEVENT\nEND:VEVENT\nBEGIN:VEVENT\nEND:VEVENT\n",
            "found 2",
        ),
    ],
)
def test_from_ics_expects_one_component(content: str, match: str) -> None:
    """Test parsing content without exactly one top level component."""
    with pytest.raises(CalendarParseError, match=match):
        Component.from_ics(content)


def test_list_from_ics_shares_timezones() -> None:
    """Test top level components parsed together share a timezone registry."""
    components = Component.list_from_ics(
        "BEGIN:VCARD\nVERSION:4.0\nFN:One\nEND:VCARD\n"
        "BEGIN:VCARD\nVERSION:4.0\nFN:Two\nEND:VCARD\n"
    )
    assert [card.get_first_property_value("fn") for card in components] == [
        "One",
        "Two",
    ]
    assert components[0].timezones is components[1].timezones
    assert Component.list_from_ics("") == []


def test_timezone_lookup(vtimezone_ics: str) -> None:
    """Test values are resolved with VTIMEZONE definitions in the same calendar."""
    timezones = TimezoneRegistry()
    calendar = Component.from_ics(
        "BEGIN:VCALENDAR\n"
        f"{vtimezone_ics}"
        "BEGIN:VEVENT\n"
        "DTSTART;TZID=America/New_York:20220101T100000\n"
        "END:VEVENT\n"
        "END:VCALENDAR\n",
        timezones=timezones,
    )
    zones = timezones.register_calendar(calendar)
    assert [zone.tzid for zone in zones] == ["America/New_York"]
    event = calendar.get_first_subcomponent("vevent")
    assert event is not None
    dtstart = event.get_first_property_value("dtstart")
    assert dtstart.zone is zones[0]
    assert dtstart.zone.component is calendar.get_first_subcomponent("vtimezone")


def test_vcard3_design_set() -> None:
    """Test a vCard without VERSION:4.0 uses the vCard 3.0 design set."""
    vcard3 = Component.from_ics("BEGIN:VCARD\nVERSION:3.0\nFN:Old\nEND:VCARD\n")
    assert vcard3.design_set.name == "vcard3"
    vcard4 = Component.from_ics("BEGIN:VCARD\nVERSION:4.0\nFN:New\nEND:VCARD\n")
    assert vcard4.design_set.name == "vcard"
    empty = Component.from_ics("BEGIN:VCARD\nEND:VCARD\n")
    assert empty.design_set.name == "vcard"


def test_property_flags(calendar: Component) -> None:
    """Test the flags describing the shape of a property value."""
    event = calendar.get_first_subcomponent("vevent")
    assert event is not None
    categories = event.get_first_property("categories")
    assert categories is not None
    assert categories.is_multi_value
    assert not categories.is_structured_value
    assert not categories.is_decorated

    dtstart = event.get_first_property("dtstart")
    assert dtstart is not None
    assert dtstart.is_decorated
    assert dtstart.parent is event
    assert dtstart.type == "date-time"


def test_repr(calendar: Component) -> None:
    """Test the representation of the views."""
    assert repr(calendar) == "Component(name='vcalendar')"
    prop = calendar.get_first_property("version")
    assert isinstance(prop, Property)
    assert repr(prop) == "Property(['version', {}, 'text', '2.0'])"
