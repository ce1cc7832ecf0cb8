"""Test fixtures."""

import textwrap

import pytest

from jcal.component import Component
from jcal.timezone import TimezoneRegistry

VTIMEZONE_NEW_YORK = textwrap.dedent(
    """\
    BEGIN:VTIMEZONE
    TZID:America/New_York
    BEGIN:STANDARD
    DTSTART:19701101T020000
    TZOFFSETFROM:-0400
    TZOFFSETTO:-0500
    TZNAME:EST
    END:STANDARD
    BEGIN:DAYLIGHT
    DTSTART:19700308T020000
    TZOFFSETFROM:-0500
    TZOFFSETTO:-0400
    TZNAME:EDT
    END:DAYLIGHT
    END:VTIMEZONE
    """
)


@pytest.fixture(name="timezones")
def mock_timezones() -> TimezoneRegistry:
    """Fixture for a timezone registry with America/New_York registered."""
    registry = TimezoneRegistry()
    registry.register_calendar(
        Component.from_ics(
            f"BEGIN:VCALENDAR\n{VTIMEZONE_NEW_YORK}END:VCALENDAR\n"
        )
    )
    return registry


@pytest.fixture(name="vtimezone_ics")
def mock_vtimezone_ics() -> str:
    """Fixture for the content of an America/New_York VTIMEZONE."""
    return VTIMEZONE_NEW_YORK
