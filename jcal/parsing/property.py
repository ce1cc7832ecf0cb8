"""Library for handling rfc5545 and rfc6350 properties and parameters.

A property is the definition of an individual attribute describing a
calendar object or a vCard. A property is also really just a "contentline",
however properties in this file are the output of the parser and hold the
value already converted into the canonical jCal shape for its value type.

The value type is decided by the design set of the component the property
lives in. For example, given a content line of:

  DUE;VALUE=DATE:20070501

This library would create a ParsedProperty object with this structure:

  ParsedProperty(
    name='due',
    params={},
    value_type='date',
    values=['2007-05-01'],
  )

Note: The "VALUE" parameter refers to the value type, so it is consumed by
the parser and is not one of the resulting parameters.

The values are a list of "value slots". A property has one slot, except
for a multi-valued property which has one slot per value e.g. the
CATEGORIES property. A structured value, like the N property of a vCard,
occupies a single slot that holds the list of its parts.
"""

# mypy: allow-any-generics

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from jcal.design import ICALENDAR, DesignSet
from jcal.exceptions import CalendarParseError

from .const import (
    ATTR_VALUE_LOWER,
    DEFAULT_PARAM_TYPE,
    DEFAULT_VALUE_TYPE,
    ESCAPE,
    PARAM_DELIMITER,
    PARAM_NAME_DELIMITER,
    QUOTE,
    VALUE_DELIMITER,
)

_LOGGER = logging.getLogger(__name__)

RFC6868_REPLACE_MAP = {"^'": '"', "^n": "\n", "^^": "^"}
RFC6868_RE = re.compile(r"\^['n^]")


@dataclass
class ParsedProperty:
    """An rfc5545 or rfc6350 property."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)
    value_type: str = DEFAULT_VALUE_TYPE
    values: list[Any] = field(default_factory=list)

    @property
    def value(self) -> Any:
        """Return the value of the first value slot."""
        return self.values[0] if self.values else None

    def get_parameter(self, name: str) -> Any:
        """Return the value of the parameter with the specified name."""
        return self.params.get(name.lower())

    def as_jcal(self) -> list[Any]:
        """Return the jCal form e.g. ['summary', {}, 'text', 'Meeting']."""
        return [self.name, self.params, self.value_type, *self.values]

    @classmethod
    def from_ics(
        cls, contentline: str, design_set: DesignSet = ICALENDAR
    ) -> ParsedProperty:
        """Decode a ParsedProperty from a single unfolded content line.

        Will raise a CalendarParseError on failure.
        """
        name, params, value = split_contentline(contentline, design_set)
        return parse_property(name, params, value, design_set)


def unescaped_index_of(buffer: str, search: str, pos: int = 0) -> int:
    """Return the index of the search string not preceded by a backslash, or -1."""
    while (pos := buffer.find(search, pos)) != -1:
        if pos > 0 and buffer[pos - 1] == ESCAPE:
            pos += 1
        else:
            return pos
    return -1


def rfc6868_unescape(value: str) -> str:
    """Replace the rfc6868 caret escapes in a parameter value."""
    if "^" not in value:
        return value
    return RFC6868_RE.sub(lambda match: RFC6868_REPLACE_MAP[match.group(0)], value)


def parse_value(
    value: str, value_type: str, design_set: DesignSet, escape: str | None = None
) -> Any:
    """Convert a raw value into its canonical form for the value type.

    Value types that are not known to the design set are passed through.
    """
    if (decoder := design_set.value_type(value_type)) and decoder.from_ical:
        return decoder.from_ical(value, escape)
    return value


def split_values(
    buffer: str,
    delimiter: str,
    value_type: str,
    design_set: DesignSet,
    inner_delimiter: str | None = None,
    escape: str | None = None,
) -> list[Any]:
    """Split a value on an unescaped delimiter and convert each piece.

    When an inner delimiter is specified each piece is itself split, for
    values that are both structured and multi-valued.
    """
    result: list[Any] = []
    last_pos = 0
    while True:
        pos = unescaped_index_of(buffer, delimiter, last_pos)
        piece = buffer[last_pos:] if pos == -1 else buffer[last_pos:pos]
        if inner_delimiter:
            result.append(
                parse_multi_value(
                    piece, inner_delimiter, value_type, design_set, escape=escape
                )
            )
        else:
            result.append(parse_value(piece, value_type, design_set, escape))
        if pos == -1:
            return result
        last_pos = pos + len(delimiter)


def parse_multi_value(
    buffer: str,
    delimiter: str,
    value_type: str,
    design_set: DesignSet,
    inner_delimiter: str | None = None,
    escape: str | None = None,
) -> Any:
    """Split a value and convert each piece, collapsing a single piece.

    An empty delimiter returns the buffer as it is.
    """
    if not delimiter:
        return buffer
    result = split_values(
        buffer, delimiter, value_type, design_set, inner_delimiter, escape
    )
    return result[0] if len(result) == 1 else result


def parse_parameters(
    line: str, design_set: DesignSet
) -> tuple[dict[str, Any], str, int]:
    """Parse the parameters of a content line starting at the first ';'.

    Returns the parameters keyed by lowercase name, the raw text of the last
    parameter value and the position in the line where that value starts. The
    position is -1 when no parameter was found.
    """
    params: dict[str, Any] = {}
    last_param = 0
    pos = 0
    value = ""
    value_pos = -1
    more = True
    while more and (pos := unescaped_index_of(line, PARAM_NAME_DELIMITER, pos + 1)) != -1:
        name = line[last_param + 1 : pos]
        if not name:
            raise CalendarParseError(f"Empty parameter name in '{line}'")
        lower_name = name.lower()
        param_type = design_set.param_type(lower_name)
        value_type = param_type.value_type or DEFAULT_PARAM_TYPE
        multi_value = param_type.multi_value

        if line[pos + 1 : pos + 2] == QUOTE:
            value_pos = pos + 2
            pos = unescaped_index_of(line, QUOTE, value_pos)
            if param_type.multi_value_separate_dquote and multi_value:
                # Scan over "a","b" as a single value
                while (
                    pos != -1
                    and line[pos + 1 : pos + 2] == multi_value
                    and line[pos + 2 : pos + 3] == QUOTE
                ):
                    pos = unescaped_index_of(line, QUOTE, pos + 3)
            if pos == -1:
                raise CalendarParseError(
                    f"Invalid line (no matching double quote) '{line}'"
                )
            value = line[value_pos:pos]
            next_param = unescaped_index_of(line, PARAM_DELIMITER, pos)
            next_value = unescaped_index_of(line, VALUE_DELIMITER, pos)
            if next_param == -1 or (next_value != -1 and next_value < next_param):
                more = False
            else:
                last_param = next_param
        else:
            value_pos = pos + 1
            next_param = unescaped_index_of(line, PARAM_DELIMITER, value_pos)
            next_value = unescaped_index_of(line, VALUE_DELIMITER, value_pos)
            if next_value != -1 and next_param > next_value:
                # The ';' is part of the property value
                next_param = next_value
                more = False
            elif next_param == -1:
                next_param = len(line) if next_value == -1 else next_value
                more = False
            else:
                last_param = next_param
                pos = next_param
            value = line[value_pos:next_param]

        param_value = rfc6868_unescape(value)
        if multi_value:
            delimiter = multi_value
            if param_type.multi_value_separate_dquote:
                delimiter = QUOTE + multi_value + QUOTE
            pieces = params.get(lower_name, [])
            if not isinstance(pieces, list):
                pieces = [pieces]
            pieces = pieces + split_values(
                param_value, delimiter, value_type, design_set
            )
            params[lower_name] = pieces[0] if len(pieces) == 1 else pieces
        else:
            params[lower_name] = parse_value(param_value, value_type, design_set)

    return params, value, value_pos


def split_contentline(
    line: str, design_set: DesignSet = ICALENDAR
) -> tuple[str, dict[str, Any], str]:
    """Split a content line into its lowercase name, parameters and raw value."""
    value_pos = line.find(VALUE_DELIMITER)
    param_pos = line.find(PARAM_DELIMITER)
    if param_pos != -1 and value_pos != -1 and param_pos > value_pos:
        # The ';' is part of the value e.g. RRULE:FREQ=DAILY;COUNT=2
        param_pos = -1

    if param_pos != -1:
        name = line[:param_pos].lower()
        params, last_value, last_value_pos = parse_parameters(
            line[param_pos:], design_set
        )
        if last_value_pos == -1:
            raise CalendarParseError(f"Invalid parameters in '{line}'")
        last_param_index = last_value_pos + len(last_value) + param_pos
        if (value_start := line.find(VALUE_DELIMITER, last_param_index)) == -1:
            raise CalendarParseError(f"Missing parameter value in '{line}'")
        return name, params, line[value_start + 1 :]

    if value_pos != -1:
        return line[:value_pos].lower(), {}, line[value_pos + 1 :]

    raise CalendarParseError(f"Invalid line (no token ';' or ':') '{line}'")


def parse_property(
    name: str, params: dict[str, Any], value: str, design_set: DesignSet
) -> ParsedProperty:
    """Decide the value type of the property and convert the raw value."""
    prop_type = design_set.property_type(name)
    value_type: str | None = None
    if prop_type is not None and value and prop_type.detect_type is not None:
        value_type = prop_type.detect_type(value)
    if not value_type:
        if ATTR_VALUE_LOWER in params:
            value_type = str(params[ATTR_VALUE_LOWER]).lower()
        elif prop_type is not None:
            value_type = prop_type.default_type
        else:
            value_type = DEFAULT_VALUE_TYPE
    params.pop(ATTR_VALUE_LOWER, None)

    multi_value = prop_type.multi_value if prop_type is not None else None
    structured_value = prop_type.structured_value if prop_type is not None else None
    values: list[Any]
    if multi_value and structured_value:
        values = [
            parse_multi_value(
                value,
                structured_value,
                value_type,
                design_set,
                inner_delimiter=multi_value,
                escape=structured_value,
            )
        ]
    elif multi_value:
        values = split_values(value, multi_value, value_type, design_set)
    elif structured_value:
        values = [
            parse_multi_value(
                value, structured_value, value_type, design_set, escape=structured_value
            )
        ]
    else:
        values = [parse_value(value, value_type, design_set)]

    if design_set.value_type(value_type) is None:
        _LOGGER.debug("Property '%s' has unknown value type '%s'", name, value_type)
    return ParsedProperty(name=name, params=params, value_type=value_type, values=values)
