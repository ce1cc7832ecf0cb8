"""A read-only view of a parsed component.

This is the entry point for reading calendar and vCard content. A
`Component` wraps the jCal tree produced by the parser and creates
`Property` and child `Component` objects on demand:

```python
from jcal.component import Component

calendar = Component.from_ics(ics_content)
for event in calendar.get_all_subcomponents("vevent"):
    print(event.get_first_property_value("summary"))
    print(event.get_first_property_value("dtstart"))
```

Values with a TZID parameter are resolved through the `TimezoneRegistry`
of the component, see `jcal.timezone`.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from .design import DesignSet, get_design_set
from .exceptions import CalendarParseError
from .parsing.component import ParsedComponent, parse_content
from .property import Property
from .timezone import TimezoneRegistry

__all__ = ["Component"]

_LOGGER = logging.getLogger(__name__)

VCARD = "vcard"
VCARD3 = "vcard3"
VCARD_VERSION = "version"
VCARD_VERSION_4 = "4.0"


class Component:
    """A component with lazily created properties and subcomponents."""

    def __init__(
        self,
        parsed: ParsedComponent,
        parent: Component | None = None,
        timezones: TimezoneRegistry | None = None,
    ) -> None:
        """Initialize Component.

        A child component shares the timezone registry of its parent. A top
        level component uses the specified registry, or an empty one.
        """
        self._parsed = parsed
        self._parent = parent
        if timezones is None:
            timezones = parent.timezones if parent is not None else TimezoneRegistry()
        self._timezones = timezones
        self._lock = threading.Lock()
        self._properties: dict[int, Property] = {}
        self._components: dict[int, Component] = {}

    @classmethod
    def from_ics(
        cls, ics: str, timezones: TimezoneRegistry | None = None
    ) -> Component:
        """Parse content with exactly one top level component."""
        components = parse_content(ics)
        if len(components) != 1:
            raise CalendarParseError(
                f"Expected exactly one top level component, found {len(components)}"
            )
        return cls(components[0], timezones=timezones)

    @classmethod
    def list_from_ics(
        cls, ics: str, timezones: TimezoneRegistry | None = None
    ) -> list[Component]:
        """Parse content with any number of top level components.

        The components share the same timezone registry.
        """
        if timezones is None:
            timezones = TimezoneRegistry()
        return [cls(parsed, timezones=timezones) for parsed in parse_content(ics)]

    @property
    def name(self) -> str:
        """Return the lowercase component name e.g. vevent."""
        return self._parsed.name

    @property
    def parent(self) -> Component | None:
        """Return the parent component, or None for a top level component."""
        return self._parent

    @property
    def parsed(self) -> ParsedComponent:
        """Return the underlying parsed component."""
        return self._parsed

    @property
    def timezones(self) -> TimezoneRegistry:
        """Return the registry used to resolve TZID parameters."""
        return self._timezones

    @property
    def design_set(self) -> DesignSet:
        """Return the design set of the component, e.g. iCalendar or vCard."""
        if self._parent is not None:
            return self._parent.design_set
        if self.name == VCARD and not self._is_vcard4():
            return get_design_set(VCARD3)
        return get_design_set(self.name)

    def _is_vcard4(self) -> bool:
        if not (props := self._parsed.properties):
            return True
        return props[0].name == VCARD_VERSION and props[0].value == VCARD_VERSION_4

    def get_first_property(self, name: str | None = None) -> Property | None:
        """Return the first property, optionally with the specified name."""
        for index, prop in enumerate(self._parsed.properties):
            if name is None or prop.name == name:
                return self._hydrate_property(index)
        return None

    def get_all_properties(self, name: str | None = None) -> list[Property]:
        """Return all properties, optionally only those with the specified name."""
        return [
            self._hydrate_property(index)
            for index, prop in enumerate(self._parsed.properties)
            if name is None or prop.name == name
        ]

    def get_first_property_value(self, name: str | None = None) -> Any:
        """Return the first value of the first property with the name, if any."""
        if (prop := self.get_first_property(name)) is None:
            return None
        return prop.get_first_value()

    def has_property(self, name: str) -> bool:
        """Return True if the component has a property with the name."""
        return any(prop.name == name for prop in self._parsed.properties)

    def get_first_subcomponent(self, name: str | None = None) -> Component | None:
        """Return the first subcomponent, optionally with the specified name."""
        for index, component in enumerate(self._parsed.components):
            if name is None or component.name == name:
                return self._hydrate_component(index)
        return None

    def get_all_subcomponents(self, name: str | None = None) -> list[Component]:
        """Return all subcomponents, optionally only those with the specified name."""
        return [
            self._hydrate_component(index)
            for index, component in enumerate(self._parsed.components)
            if name is None or component.name == name
        ]

    def as_jcal(self) -> list[Any]:
        """Return the jCal form of the component."""
        return self._parsed.as_jcal()

    def _hydrate_property(self, index: int) -> Property:
        with self._lock:
            if (prop := self._properties.get(index)) is None:
                prop = Property(self._parsed.properties[index], parent=self)
                self._properties[index] = prop
            return prop

    def _hydrate_component(self, index: int) -> Component:
        with self._lock:
            if (component := self._components.get(index)) is None:
                component = Component(self._parsed.components[index], parent=self)
                self._components[index] = component
            return component

    def __repr__(self) -> str:
        return f"Component(name={self.name!r})"
