"""Library for handling rfc5545 and rfc6350 components.

An iCalendar object consists of one or more components, that may have
properties or sub-components. An example of a component might be the
calendar itself, an event, a to-do, a journal entry, timezone info, or a
vCard.

Components created here are the jCal tree: each property value has already
been converted into the canonical form of its value type, but is not yet
decorated into a rich value object. See `jcal.component` for that.
"""

# mypy: allow-any-generics

from __future__ import annotations

import logging
import re
from collections.abc import Generator, Iterable
from dataclasses import dataclass, field
from typing import Any

from jcal.design import DesignSet, get_design_set
from jcal.exceptions import CalendarParseError

from .const import ATTR_BEGIN_LOWER, ATTR_END, ATTR_END_LOWER, FOLD, WSP
from .property import ParsedProperty, parse_property, split_contentline

_LOGGER = logging.getLogger(__name__)

FOLD_RE = re.compile(FOLD, flags=re.MULTILINE)
LINES_RE = re.compile(r"\r?\n")

VCARD = "vcard"
VCARD3 = "vcard3"
VCARD_VERSION = "version"
VCARD_VERSION_4 = "4.0"


@dataclass
class ParsedComponent:
    """An rfc5545 or rfc6350 component."""

    name: str
    properties: list[ParsedProperty] = field(default_factory=list)
    components: list[ParsedComponent] = field(default_factory=list)

    def as_jcal(self) -> list[Any]:
        """Return the jCal form e.g. ['vevent', [...properties], [...components]]."""
        return [
            self.name,
            [prop.as_jcal() for prop in self.properties],
            [component.as_jcal() for component in self.components],
        ]


def unfolded_lines(content: str) -> Generator[str, None, None]:
    """Read content and unfold lines.

    A line starting with a single space or tab continues the previous line.
    Empty lines are skipped.
    """
    content = FOLD_RE.sub("", content.lstrip("".join(WSP)))
    lines = LINES_RE.split(content)
    last = len(lines) - 1
    for index, line in enumerate(lines):
        if index == last:
            line = line.strip()
        if line:
            yield line


class _ParseState:
    """The components that are open while parsing content."""

    def __init__(self) -> None:
        self.components: list[ParsedComponent] = []
        self._stack: list[tuple[ParsedComponent, DesignSet]] = []

    @property
    def is_open(self) -> bool:
        """Return True if a component has not been closed."""
        return bool(self._stack)

    @property
    def design_set(self) -> DesignSet:
        """Return the design set of the current component."""
        if not self._stack:
            return get_design_set(None)
        return self._stack[-1][1]

    def begin(self, name: str) -> None:
        """Open a new component as a child of the current component."""
        component = ParsedComponent(name=name)
        if self._stack:
            parent, design_set = self._stack[-1]
            parent.components.append(component)
        else:
            design_set = get_design_set(name)
            _LOGGER.debug("Using '%s' design set for '%s'", design_set.name, name)
            self.components.append(component)
        self._stack.append((component, design_set))

    def end(self, name: str) -> None:
        """Close the current component."""
        if not self._stack:
            raise CalendarParseError(
                f"Unexpected '{ATTR_END}:{name.upper()}' without a matching BEGIN"
            )
        component, _ = self._stack.pop()
        if name != component.name:
            _LOGGER.debug(
                "Unexpected '%s:%s', expected '%s:%s'",
                ATTR_END,
                name.upper(),
                ATTR_END,
                component.name.upper(),
            )

    def add_property(self, prop: ParsedProperty) -> None:
        """Add the property to the current component."""
        if not self._stack:
            raise CalendarParseError(
                f"Unexpected property '{prop.name}' outside of a component"
            )
        component, design_set = self._stack[-1]
        if (
            component.name == VCARD
            and not component.properties
            and not (prop.name == VCARD_VERSION and prop.value == VCARD_VERSION_4)
        ):
            # Only vCard 4.0 requires VERSION to be the first property
            _LOGGER.debug("Using vCard 3.0 design set for '%s'", component.name)
            self._stack[-1] = (component, get_design_set(VCARD3))
        component.properties.append(prop)

    def handle_line(self, line: str) -> None:
        """Handle a single unfolded content line."""
        name, params, value = split_contentline(line, self.design_set)
        if not params:
            if name == ATTR_BEGIN_LOWER:
                self.begin(value.lower())
                return
            if name == ATTR_END_LOWER:
                self.end(value.lower())
                return
        self.add_property(parse_property(name, params, value, self.design_set))


def parse_lines(lines: Iterable[str]) -> list[ParsedComponent]:
    """Parse unfolded content lines into a list of top level components."""
    state = _ParseState()
    for line in lines:
        try:
            state.handle_line(line)
        except CalendarParseError as err:
            raise CalendarParseError(
                f"Failed to parse calendar contents: {err.message}",
                detailed_error=line,
            ) from err
    if state.is_open:
        raise CalendarParseError(
            "Failed to parse calendar contents: component began but did not end"
        )
    return state.components


def parse_content(content: str) -> list[ParsedComponent]:
    """Parse content into a list of top level components.

    This includes all necessary unfolding of long lines into full properties.

    This is fairly straight forward in that it walks through each line and
    uses a stack to associate properties with the current component. The
    design set of the component decides how each property value is
    converted. Will raise a CalendarParseError on failure.
    """
    return parse_lines(unfolded_lines(content))


def parse(content: str) -> ParsedComponent | list[ParsedComponent]:
    """Parse content into a single component, or a list if there are many."""
    components = parse_content(content)
    if len(components) == 1:
        return components[0]
    return components
