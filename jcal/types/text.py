"""Library for parsing TEXT values."""

from __future__ import annotations

import re
from functools import cache

from .data_types import DATA_TYPE, VCARD3_DATA_TYPE, VCARD_DATA_TYPE

UNESCAPE_CHAR = {"\\\\": "\\", "\\;": ";", "\\,": ",", "\\N": "\n", "\\n": "\n"}

FROM_ICAL_NEWLINE = re.compile(r"\\\\|\\;|\\,|\\[Nn]")
FROM_VCARD_NEWLINE = re.compile(r"\\\\|\\,|\\[Nn]")


@cache
def _escape_pattern(pattern: re.Pattern[str], escape: str) -> re.Pattern[str]:
    """Extend an unescape pattern with an escaped structured value delimiter."""
    return re.compile(pattern.pattern + "|\\\\" + re.escape(escape))


def _replace(match: re.Match[str]) -> str:
    value = match.group(0)
    return UNESCAPE_CHAR.get(value, value)


def unescape_text(
    value: str, pattern: re.Pattern[str] = FROM_ICAL_NEWLINE, escape: str | None = None
) -> str:
    """Replace backslash escape sequences in a TEXT value."""
    if "\\" not in value:
        return value
    if escape:
        pattern = _escape_pattern(pattern, escape)
    return pattern.sub(_replace, value)


@DATA_TYPE.register("text", matches=".*")
class TextDecoder:
    """Decode an rfc5545 TEXT value."""

    UNESCAPE_PATTERN = FROM_ICAL_NEWLINE

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Parse a rfc5545 into a text value."""
        return unescape_text(value, cls.UNESCAPE_PATTERN, escape)


@VCARD_DATA_TYPE.register("text", matches=".*")
@VCARD_DATA_TYPE.register("uri")
@VCARD3_DATA_TYPE.register("text", matches=".*")
@VCARD3_DATA_TYPE.register("uri")
@VCARD3_DATA_TYPE.register("vcard")
class VCardTextDecoder(TextDecoder):
    """Decode a vCard TEXT value.

    A vCard only escapes a semicolon within a structured value, where the
    delimiter is passed as the escape.
    """

    UNESCAPE_PATTERN = FROM_VCARD_NEWLINE
