"""Timezone definitions referenced by date and time values.

A `Timezone` is identified by a tzid and may carry the VTIMEZONE component
that defines it. Date-time values with a TZID parameter are resolved through a
`TimezoneRegistry`, which is populated by the caller before the values are
decoded:

```python
from jcal.component import Component
from jcal.timezone import TimezoneRegistry

timezones = TimezoneRegistry()
calendar = Component.from_ics(ics_content, timezones=timezones)
timezones.register_calendar(calendar)
event = calendar.get_first_subcomponent("vevent")
print(event.get_first_property_value("dtstart").zone.tzid)
```

Two singletons exist that are never registered: `FLOATING` for local times
that are not bound to a zone, and `UTC` for values with a trailing `Z`.
"""

from __future__ import annotations

import datetime
import logging
import threading
import zoneinfo
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .exceptions import CalendarError

if TYPE_CHECKING:
    from .component import Component

__all__ = [
    "Timezone",
    "TimezoneRegistry",
    "FLOATING",
    "UTC",
]

_LOGGER = logging.getLogger(__name__)

VTIMEZONE = "vtimezone"
ATTR_TZID = "tzid"


class Timezone:
    """A timezone, compared by identity."""

    def __init__(
        self,
        tzid: str = "",
        *,
        location: str | None = None,
        tznames: str | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
        component: Component | None = None,
    ) -> None:
        """Initialize Timezone.

        The tzid is read from the component when not specified.
        """
        self.tzid = tzid
        self.location = location
        self.tznames = tznames
        self.latitude = latitude
        self.longitude = longitude
        self.component = component
        if component is not None and not tzid:
            self.tzid = component.get_first_property_value(ATTR_TZID) or ""

    @classmethod
    def from_ics(cls, ics: str) -> Timezone:
        """Create a Timezone from VTIMEZONE content."""
        from .component import Component

        return cls(component=Component.from_ics(ics))

    def as_tzinfo(self) -> datetime.tzinfo | None:
        """Return the python tzinfo for this timezone.

        The floating timezone has no tzinfo. Other timezones are resolved
        from the IANA timezone database by their tzid.
        """
        if self is FLOATING:
            return None
        if self is UTC:
            return datetime.timezone.utc
        try:
            return zoneinfo.ZoneInfo(self.tzid)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError) as err:
            raise CalendarError(
                f"Timezone '{self.tzid}' is not a known IANA timezone"
            ) from err

    def __str__(self) -> str:
        """Return the timezone identifier."""
        return self.tzid

    def __repr__(self) -> str:
        return f"Timezone(tzid={self.tzid!r})"


FLOATING = Timezone(tzid="floating")
"""Timezone of local times that are not bound to any zone."""

UTC = Timezone(tzid="UTC")
"""Timezone of times with a trailing 'Z'."""


class TimezoneRegistry:
    """A lookup table of timezones keyed by tzid.

    Timezones may only be added. Registration should happen before values
    that reference the tzid are decoded.
    """

    def __init__(self, zones: Iterable[Timezone] = ()) -> None:
        """Initialize TimezoneRegistry."""
        self._lock = threading.Lock()
        self._zones: dict[str, Timezone] = {}
        for zone in zones:
            self.register(zone)

    def register(self, zone: Timezone) -> None:
        """Add the timezone to the registry."""
        if not zone.tzid:
            raise ValueError("Timezone must have a tzid to be registered")
        with self._lock:
            _LOGGER.debug("Registering timezone '%s'", zone.tzid)
            self._zones[zone.tzid] = zone

    def register_calendar(self, calendar: Component) -> list[Timezone]:
        """Register a Timezone for every VTIMEZONE in the calendar."""
        zones = [
            Timezone(component=component)
            for component in calendar.get_all_subcomponents(VTIMEZONE)
        ]
        for zone in zones:
            self.register(zone)
        return zones

    def get(self, tzid: str) -> Timezone | None:
        """Return the timezone with the specified tzid."""
        with self._lock:
            return self._zones.get(tzid)

    def __contains__(self, tzid: object) -> bool:
        with self._lock:
            return tzid in self._zones

    def __len__(self) -> int:
        with self._lock:
            return len(self._zones)
