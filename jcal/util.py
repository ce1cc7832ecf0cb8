"""Utility methods used by multiple components."""

from __future__ import annotations

import re

from .exceptions import CalendarParseError

__all__ = [
    "parse_int_prefix",
    "strict_parse_int",
]

_INTEGER_REGEX = re.compile(r"\s*([-+]?[0-9]+)")


def parse_int_prefix(value: str) -> int | None:
    """Parse the leading integer of the value, ignoring any trailing text."""
    if not (match := _INTEGER_REGEX.match(value)):
        return None
    return int(match.group(1))


def strict_parse_int(value: str) -> int:
    """Parse the leading integer of a value, raising if there is none."""
    if (result := parse_int_prefix(value)) is None:
        raise CalendarParseError(f"Could not extract integer from '{value}'")
    return result
