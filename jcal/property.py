"""A read-only view of a property that decorates its values on demand.

The values of a parsed property are in their canonical jCal form. A
`Property` wraps the parsed property and converts each value into a rich
value object, for example a DATE-TIME into a `jcal.time.Time`, the first
time the value is requested. Decorated values are cached.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from .design import ICALENDAR, DesignSet
from .parsing.property import ParsedProperty
from .timezone import TimezoneRegistry

if TYPE_CHECKING:
    from .component import Component

__all__ = ["Property"]

_LOGGER = logging.getLogger(__name__)


class Property:
    """A property of a component with lazily decorated values."""

    def __init__(
        self,
        parsed: ParsedProperty,
        parent: Component | None = None,
        timezones: TimezoneRegistry | None = None,
    ) -> None:
        """Initialize Property."""
        self._parsed = parsed
        self._parent = parent
        self._timezones = timezones
        self._lock = threading.Lock()
        self._values: dict[int, Any] = {}

    @property
    def name(self) -> str:
        """Return the lowercase property name."""
        return self._parsed.name

    @property
    def type(self) -> str:
        """Return the value type of the property e.g. date-time."""
        return self._parsed.value_type

    @property
    def parent(self) -> Component | None:
        """Return the component the property belongs to."""
        return self._parent

    @property
    def parsed(self) -> ParsedProperty:
        """Return the underlying parsed property."""
        return self._parsed

    @property
    def design_set(self) -> DesignSet:
        """Return the design set of the parent component, or iCalendar."""
        if self._parent is not None:
            return self._parent.design_set
        return ICALENDAR

    @property
    def timezones(self) -> TimezoneRegistry:
        """Return the registry used to resolve TZID parameters."""
        if self._timezones is not None:
            return self._timezones
        if self._parent is not None:
            return self._parent.timezones
        self._timezones = TimezoneRegistry()
        return self._timezones

    @property
    def is_decorated(self) -> bool:
        """Return True if the values are decorated into value objects."""
        value_type = self.design_set.value_type(self.type)
        return value_type is not None and value_type.decorate is not None

    @property
    def is_multi_value(self) -> bool:
        """Return True if the property may have multiple values."""
        prop_type = self.design_set.property_type(self.name)
        return prop_type is not None and prop_type.multi_value is not None

    @property
    def is_structured_value(self) -> bool:
        """Return True if the value of the property has multiple parts."""
        prop_type = self.design_set.property_type(self.name)
        return prop_type is not None and prop_type.structured_value is not None

    def get_parameter(self, name: str) -> Any:
        """Return the value of a parameter, or None if not present."""
        return self._parsed.get_parameter(name)

    def get_first_value(self) -> Any:
        """Return the first value, or None if the property has no value."""
        return self._hydrate_value(0)

    def get_values(self) -> list[Any]:
        """Return all of the values of the property."""
        return [self._hydrate_value(index) for index in range(len(self._parsed.values))]

    def as_jcal(self) -> list[Any]:
        """Return the jCal form of the property."""
        return self._parsed.as_jcal()

    def _hydrate_value(self, index: int) -> Any:
        if index >= len(self._parsed.values):
            return None
        value = self._parsed.values[index]
        value_type = self.design_set.value_type(self.type)
        if value_type is None or value_type.decorate is None:
            return value
        with self._lock:
            if index not in self._values:
                self._values[index] = value_type.decorate(value, self)
            return self._values[index]

    def __repr__(self) -> str:
        return f"Property({self.as_jcal()!r})"
