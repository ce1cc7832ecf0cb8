"""Library for the value types of vCard 4.0 and vCard 3.0.

A vCard date or time may have reduced accuracy, for example a birthday
without a year is written `--0415`. These values are converted to their
jCal form but are not decorated since they can't be represented as a `Time`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jcal.time import Time

from .data_types import VCARD3_DATA_TYPE, VCARD_DATA_TYPE
from .date import date_from_ical
from .date_time import DateTimeDecoder, date_time_from_ical

if TYPE_CHECKING:
    from jcal.property import Property


def _split_zone(value: str) -> tuple[str, str]:
    """Split a vCard time into the time of day and the zone suffix."""
    sign = value[-5:-4]
    if value.endswith("Z"):
        return value[:-1], "Z"
    if len(value) > 6 and sign in ("-", "+"):
        return value[:-5], value[-5:]
    return value, ""


@VCARD_DATA_TYPE.register("date")
class VCardDateDecoder:
    """Decode a vCard 4.0 DATE, which may have reduced accuracy."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Convert YYYYMMDD or --MMDD into the jCal form."""
        if len(value) == 8:
            return date_from_ical(value)
        if value[0:1] == "-" and len(value) == 6:
            return f"{value[0:4]}-{value[4:]}"
        return value


@VCARD_DATA_TYPE.register("time")
class VCardTimeDecoder:
    """Decode a vCard 4.0 TIME, which may have a UTC offset suffix."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Convert HHMMSS(Z|[+-]HHMM)? into HH:MM:SS(Z|[+-]HH:MM)?."""
        value, zone = _split_zone(value)
        if len(value) == 6:
            value = f"{value[0:2]}:{value[2:4]}:{value[4:6]}"
        elif len(value) == 4 and value[0] != "-":
            value = f"{value[0:2]}:{value[2:4]}"
        elif len(value) == 5:
            value = f"{value[0:3]}:{value[3:5]}"
        if len(zone) == 5 and zone[0] in ("-", "+"):
            zone = f"{zone[0:3]}:{zone[3:]}"
        return value + zone


@VCARD_DATA_TYPE.register("date-and-or-time")
@VCARD_DATA_TYPE.register("date-time")
class VCardDateAndOrTimeDecoder:
    """Decode a vCard 4.0 DATE-TIME or DATE-AND-OR-TIME.

    Either side of the 'T' may be missing, e.g. T1022 is only a time.
    """

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Convert the date and time parts separately."""
        date_part, _, time_part = value.partition("T")
        result = VCardDateDecoder.__from_ical__(date_part) if date_part else ""
        if time_part:
            result += "T" + VCardTimeDecoder.__from_ical__(time_part)
        return result


@VCARD_DATA_TYPE.register("timestamp")
class VCardTimestampDecoder(DateTimeDecoder):
    """Decode a vCard 4.0 TIMESTAMP, which is a complete date and time."""


@VCARD_DATA_TYPE.register("language-tag", matches=r"^[a-zA-Z0-9-]+$")
class LanguageTag(str):
    """A language tag e.g. en-US, kept as the raw string."""


@VCARD3_DATA_TYPE.register("date")
class VCard3DateDecoder:
    """Decode a vCard 3.0 DATE, which may already be in the extended format."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Convert the basic format, passing the extended format through."""
        if len(value) == 8:
            return date_from_ical(value)
        return value

    @classmethod
    def __decorate__(cls, value: Any, prop: Property | None = None) -> Time:
        """Create a date Time from a jCal date string."""
        return Time.from_date_string(value)


@VCARD3_DATA_TYPE.register("date-time")
class VCard3DateTimeDecoder:
    """Decode a vCard 3.0 DATE-TIME, which may already be in the extended format."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Convert the basic format, passing the extended format through."""
        if len(value) == 15 or (len(value) == 16 and value.endswith("Z")):
            return date_time_from_ical(value)
        return value

    @classmethod
    def __decorate__(cls, value: Any, prop: Property | None = None) -> Time:
        """Create a Time from a jCal date-time string."""
        return Time.from_date_time_string(value, prop)


@VCARD3_DATA_TYPE.register("phone-number")
class PhoneNumber(str):
    """A vCard 3.0 telephone number, kept as the raw string."""
