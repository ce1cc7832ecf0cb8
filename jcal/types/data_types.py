"""Library for registering rfc5545 and rfc6350 value data types.

Each value type is a class that implements some of the optional methods of
the `DataType` protocol. Decorating the class with a `Registry` makes the
value type available to a design set under its value type name, which is the
lowercase name used in jCal e.g. `date-time`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:
    from jcal.property import Property

_LOGGER = logging.getLogger(__name__)

T_TYPE = TypeVar("T_TYPE", bound=type)

FromIcal = Callable[[str, "str | None"], Any]
Decorate = Callable[[Any, "Property | None"], Any]


class DataType(Protocol):
    """Defines the protocol implemented by data types in this library.

    The methods defined in this protocol are all optional.
    """

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> Any:
        """Convert the raw content line value into the canonical jCal shape.

        The escape is the delimiter of a structured value, if the value is
        a piece of one.
        """

    @classmethod
    def __decorate__(cls, value: Any, prop: Property | None = None) -> Any:
        """Wrap the canonical jCal value into a rich value object."""


@dataclass(frozen=True)
class ValueType:
    """Behavior of a single value type within a design set."""

    name: str

    from_ical: FromIcal | None = None
    """Converts raw text into the canonical value, or None to pass through."""

    decorate: Decorate | None = None
    """Converts the canonical value into a value object, if supported."""

    values: tuple[str, ...] | None = None
    """Valid values for this value type (informational)."""

    matches: re.Pattern[str] | None = None
    """A regular expression the value type must match (informational)."""


class Registry:
    """Registry of value data types for a design set."""

    def __init__(self) -> None:
        """Initialize Registry."""
        self._items: dict[str, ValueType] = {}

    def register(
        self,
        name: str,
        values: list[str] | None = None,
        matches: str | None = None,
    ) -> Callable[[T_TYPE], T_TYPE]:
        """Return decorator to register a type.

        The name is the lowercase Property Data Type value name.
        """

        def decorator(func: T_TYPE) -> T_TYPE:
            """Register decorated function."""
            self._items[name] = ValueType(
                name=name,
                from_ical=getattr(func, "__from_ical__", None),
                decorate=getattr(func, "__decorate__", None),
                values=tuple(values) if values else None,
                matches=re.compile(matches) if matches else None,
            )
            _LOGGER.debug("Registered value type '%s' from %s", name, func)
            return func

        return decorator

    def __getitem__(self, name: str) -> ValueType:
        """Return the registered value type with the specified name."""
        return self._items[name]

    def __contains__(self, name: object) -> bool:
        """Return True if the value type is registered."""
        return name in self._items

    def value_types(self) -> Mapping[str, ValueType]:
        """Return a read only view of all registered value types."""
        return MappingProxyType(self._items)


DATA_TYPE: Registry = Registry()
"""Value types of rfc5545 iCalendar."""

VCARD_DATA_TYPE: Registry = Registry()
"""Value types specific to rfc6350 vCard 4.0."""

VCARD3_DATA_TYPE: Registry = Registry()
"""Value types specific to rfc2426 vCard 3.0."""
