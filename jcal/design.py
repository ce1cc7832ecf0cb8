"""Design sets describing how to parse the properties of a component.

A design set is a table keyed by name for the value types, parameters and
properties of a family of components. The parser consults the design set to
decide the value type of a property, whether the value is a list or is
structured, and how to decode parameter values.

There are design sets for rfc5545 iCalendar, rfc6350 vCard 4.0 and rfc2426
vCard 3.0. A top level component selects its design set by name:

```python
from jcal.design import get_design_set

design_set = get_design_set("vcard")
print(design_set.property_type("n"))
```

Unknown names fall back to the iCalendar design set.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .types.data_types import DATA_TYPE, VCARD3_DATA_TYPE, VCARD_DATA_TYPE, ValueType

__all__ = [
    "ParamType",
    "PropertyType",
    "DesignSet",
    "ICALENDAR",
    "VCARD",
    "VCARD3",
    "get_design_set",
]

_LOGGER = logging.getLogger(__name__)

DetectType = Callable[[str], str]


@dataclass(frozen=True)
class ParamType:
    """Describes how to decode the values of a property parameter."""

    values: tuple[str, ...] | None = None
    """Valid values for the parameter (informational)."""

    matches: str | None = None
    """A regular expression the parameter must match (informational)."""

    value_type: str | None = None
    """The value type of the parameter values, text when not specified."""

    allow_x_name: bool = False
    allow_iana_token: bool = False

    multi_value: str | None = None
    """The delimiter between multiple values of the parameter."""

    multi_value_separate_dquote: bool = False
    """Each one of the multiple values is quoted separately e.g. "a","b"."""


@dataclass(frozen=True)
class PropertyType:
    """Describes the value of a property."""

    default_type: str
    """The value type used when the property has no VALUE parameter."""

    allowed_types: tuple[str, ...] | None = None
    """Value types allowed in the VALUE parameter (informational)."""

    multi_value: str | None = None
    """The delimiter between multiple values of the property."""

    structured_value: str | None = None
    """The delimiter between the parts of a structured value."""

    detect_type: DetectType | None = field(default=None, compare=False)
    """Returns the value type based on the raw value."""


TEXT_PARAM = ParamType()


@dataclass(frozen=True)
class DesignSet:
    """Value, parameter and property definitions of a family of components."""

    name: str
    values: Mapping[str, ValueType]
    params: Mapping[str, ParamType]
    properties: Mapping[str, PropertyType]

    def value_type(self, name: str) -> ValueType | None:
        """Return the value type, or None if it is not known."""
        return self.values.get(name)

    def param_type(self, name: str) -> ParamType:
        """Return the parameter definition, which is plain text if not known."""
        return self.params.get(name, TEXT_PARAM)

    def property_type(self, name: str) -> PropertyType | None:
        """Return the property definition, or None if it is not known."""
        return self.properties.get(name)


def _detect_rdate(value: str) -> str:
    if "/" in value:
        return "period"
    return "date" if "T" not in value else "date-time"


def _detect_date_or_date_time(value: str) -> str:
    return "date" if "T" not in value else "date-time"


TEXT = PropertyType(default_type="text")
TEXT_MULTI = PropertyType(default_type="text", multi_value=",")
TEXT_STRUCTURED = PropertyType(default_type="text", structured_value=";")
INTEGER = PropertyType(default_type="integer")
DATE_TIME = PropertyType(default_type="date-time")
DATE_TIME_OR_DATE = PropertyType(
    default_type="date-time", allowed_types=("date-time", "date")
)
URI = PropertyType(default_type="uri")
UTC_OFFSET = PropertyType(default_type="utc-offset")
RECUR = PropertyType(default_type="recur")
CAL_ADDRESS = PropertyType(default_type="cal-address")
DATE_AND_OR_TIME = PropertyType(
    default_type="date-and-or-time", allowed_types=("date-time", "date", "text")
)

# Properties shared by iCalendar and vCard
_COMMON_PROPERTIES: dict[str, PropertyType] = {
    "categories": TEXT_MULTI,
    "url": URI,
    "version": TEXT,
    "uid": TEXT,
}

_ICAL_PARAMS: dict[str, ParamType] = {
    "cutype": ParamType(
        values=("INDIVIDUAL", "GROUP", "RESOURCE", "ROOM", "UNKNOWN"),
        allow_x_name=True,
        allow_iana_token=True,
    ),
    "delegated-from": ParamType(
        value_type="cal-address", multi_value=",", multi_value_separate_dquote=True
    ),
    "delegated-to": ParamType(
        value_type="cal-address", multi_value=",", multi_value_separate_dquote=True
    ),
    "encoding": ParamType(values=("8BIT", "BASE64")),
    "fbtype": ParamType(
        values=("FREE", "BUSY", "BUSY-UNAVAILABLE", "BUSY-TENTATIVE"),
        allow_x_name=True,
        allow_iana_token=True,
    ),
    "member": ParamType(
        value_type="cal-address", multi_value=",", multi_value_separate_dquote=True
    ),
    "partstat": ParamType(
        values=(
            "NEEDS-ACTION",
            "ACCEPTED",
            "DECLINED",
            "TENTATIVE",
            "DELEGATED",
            "COMPLETED",
            "IN-PROCESS",
        ),
        allow_x_name=True,
        allow_iana_token=True,
    ),
    "range": ParamType(values=("THISANDFUTURE",)),
    "related": ParamType(values=("START", "END")),
    "reltype": ParamType(
        values=("PARENT", "CHILD", "SIBLING"),
        allow_x_name=True,
        allow_iana_token=True,
    ),
    "role": ParamType(
        values=("REQ-PARTICIPANT", "CHAIR", "OPT-PARTICIPANT", "NON-PARTICIPANT"),
        allow_x_name=True,
        allow_iana_token=True,
    ),
    "rsvp": ParamType(values=("TRUE", "FALSE")),
    "sent-by": ParamType(value_type="cal-address"),
    "tzid": ParamType(matches=r"^/"),
    "value": ParamType(
        # The values are type names, so lowercase
        values=(
            "binary",
            "boolean",
            "cal-address",
            "date",
            "date-time",
            "duration",
            "float",
            "integer",
            "period",
            "recur",
            "text",
            "time",
            "uri",
            "utc-offset",
        ),
        allow_x_name=True,
        allow_iana_token=True,
    ),
}

_ICAL_PROPERTIES: dict[str, PropertyType] = {
    **_COMMON_PROPERTIES,
    "action": TEXT,
    "attach": URI,
    "attendee": CAL_ADDRESS,
    "calscale": TEXT,
    "class": TEXT,
    "comment": TEXT,
    "completed": DATE_TIME,
    "contact": TEXT,
    "created": DATE_TIME,
    "description": TEXT,
    "dtend": DATE_TIME_OR_DATE,
    "dtstamp": DATE_TIME,
    "dtstart": DATE_TIME_OR_DATE,
    "due": DATE_TIME_OR_DATE,
    "duration": PropertyType(default_type="duration"),
    "exdate": PropertyType(
        default_type="date-time", allowed_types=("date-time", "date"), multi_value=","
    ),
    "exrule": RECUR,
    "freebusy": PropertyType(default_type="period", multi_value=","),
    "geo": PropertyType(default_type="float", structured_value=";"),
    "last-modified": DATE_TIME,
    "location": TEXT,
    "method": TEXT,
    "organizer": CAL_ADDRESS,
    "percent-complete": INTEGER,
    "priority": INTEGER,
    "prodid": TEXT,
    "related-to": TEXT,
    "repeat": INTEGER,
    "rdate": PropertyType(
        default_type="date-time",
        allowed_types=("date-time", "date", "period"),
        multi_value=",",
        detect_type=_detect_rdate,
    ),
    "recurrence-id": DATE_TIME_OR_DATE,
    "resources": TEXT_MULTI,
    "request-status": TEXT_STRUCTURED,
    "rrule": RECUR,
    "sequence": INTEGER,
    "status": TEXT,
    "summary": TEXT,
    "transp": TEXT,
    "trigger": PropertyType(
        default_type="duration", allowed_types=("duration", "date-time")
    ),
    "tzoffsetfrom": UTC_OFFSET,
    "tzoffsetto": UTC_OFFSET,
    "tzurl": URI,
    "tzid": TEXT,
    "tzname": TEXT,
}

_VCARD_PARAMS: dict[str, ParamType] = {
    "type": ParamType(value_type="text", multi_value=","),
    "value": ParamType(
        values=(
            "text",
            "uri",
            "date",
            "time",
            "date-time",
            "date-and-or-time",
            "timestamp",
            "boolean",
            "integer",
            "float",
            "utc-offset",
            "language-tag",
        ),
        allow_x_name=True,
        allow_iana_token=True,
    ),
}

_VCARD_PROPERTIES: dict[str, PropertyType] = {
    **_COMMON_PROPERTIES,
    "adr": PropertyType(default_type="text", structured_value=";", multi_value=","),
    "anniversary": DATE_AND_OR_TIME,
    "bday": DATE_AND_OR_TIME,
    "caladruri": URI,
    "caluri": URI,
    "clientpidmap": TEXT_STRUCTURED,
    "email": TEXT,
    "fburl": URI,
    "fn": TEXT,
    "gender": TEXT_STRUCTURED,
    "geo": URI,
    "impp": URI,
    "key": URI,
    "kind": TEXT,
    "lang": PropertyType(default_type="language-tag"),
    "logo": URI,
    "member": URI,
    "n": PropertyType(default_type="text", structured_value=";", multi_value=","),
    "nickname": TEXT_MULTI,
    "note": TEXT,
    "org": TEXT_STRUCTURED,
    "photo": URI,
    "prodid": TEXT,
    "related": URI,
    "rev": PropertyType(default_type="timestamp"),
    "role": TEXT,
    "sound": URI,
    "source": URI,
    "tel": PropertyType(default_type="uri", allowed_types=("uri", "text")),
    "title": TEXT,
    "tz": PropertyType(default_type="text", allowed_types=("text", "utc-offset", "uri")),
    "xml": TEXT,
}

_VCARD3_PARAMS: dict[str, ParamType] = {
    "type": ParamType(value_type="text", multi_value=","),
    "value": ParamType(
        values=(
            "text",
            "uri",
            "date",
            "date-time",
            "phone-number",
            "time",
            "boolean",
            "integer",
            "float",
            "utc-offset",
            "vcard",
            "binary",
        ),
        allow_x_name=True,
        allow_iana_token=True,
    ),
}

_VCARD3_PROPERTIES: dict[str, PropertyType] = {
    **_COMMON_PROPERTIES,
    "fn": TEXT,
    "n": TEXT_STRUCTURED,
    "nickname": TEXT_MULTI,
    "photo": PropertyType(default_type="binary", allowed_types=("binary", "uri")),
    "bday": PropertyType(
        default_type="date",
        allowed_types=("date", "date-time"),
        detect_type=_detect_date_or_date_time,
    ),
    "adr": PropertyType(default_type="text", structured_value=";", multi_value=","),
    "label": TEXT,
    "tel": PropertyType(default_type="phone-number"),
    "email": TEXT,
    "mailer": TEXT,
    "tz": PropertyType(default_type="utc-offset", allowed_types=("utc-offset", "text")),
    "geo": PropertyType(default_type="float", structured_value=";"),
    "title": TEXT,
    "role": TEXT,
    "logo": PropertyType(default_type="binary", allowed_types=("binary", "uri")),
    "agent": PropertyType(default_type="vcard", allowed_types=("vcard", "text", "uri")),
    "org": TEXT_STRUCTURED,
    "note": TEXT,
    "prodid": TEXT,
    "rev": PropertyType(default_type="date-time", allowed_types=("date-time", "date")),
    "sort-string": TEXT,
    "sound": PropertyType(default_type="binary", allowed_types=("binary", "uri")),
    "class": TEXT,
    "key": PropertyType(default_type="binary", allowed_types=("binary", "text")),
}


def _vcard_values(vcard_values: Mapping[str, ValueType]) -> Mapping[str, ValueType]:
    """Combine the value types shared with iCalendar and the vCard value types."""
    values = {
        name: DATA_TYPE[name]
        for name in ("boolean", "float", "integer", "utc-offset")
    }
    values.update(vcard_values)
    return MappingProxyType(values)


ICALENDAR = DesignSet(
    name="icalendar",
    values=DATA_TYPE.value_types(),
    params=MappingProxyType(_ICAL_PARAMS),
    properties=MappingProxyType(_ICAL_PROPERTIES),
)
"""Design set for rfc5545 iCalendar."""

VCARD = DesignSet(
    name="vcard",
    values=_vcard_values(VCARD_DATA_TYPE.value_types()),
    params=MappingProxyType(_VCARD_PARAMS),
    properties=MappingProxyType(_VCARD_PROPERTIES),
)
"""Design set for rfc6350 vCard 4.0."""

VCARD3 = DesignSet(
    name="vcard3",
    values=_vcard_values(VCARD3_DATA_TYPE.value_types()),
    params=MappingProxyType(_VCARD3_PARAMS),
    properties=MappingProxyType(_VCARD3_PROPERTIES),
)
"""Design set for rfc2426 vCard 3.0."""

COMPONENTS: Mapping[str, DesignSet] = MappingProxyType(
    {
        "vevent": ICALENDAR,
        "vtodo": ICALENDAR,
        "vjournal": ICALENDAR,
        "valarm": ICALENDAR,
        "vfreebusy": ICALENDAR,
        "vtimezone": ICALENDAR,
        "daylight": ICALENDAR,
        "standard": ICALENDAR,
        "vcard": VCARD,
        "vcard3": VCARD3,
    }
)
"""Design sets of known components, keyed by lowercase component name."""


def get_design_set(component_name: str | None) -> DesignSet:
    """Return the design set of the component, or iCalendar if not known."""
    if component_name and (design_set := COMPONENTS.get(component_name)):
        return design_set
    return ICALENDAR
