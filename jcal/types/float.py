"""Library for parsing FLOAT values."""

import logging
import re

from .data_types import DATA_TYPE

_LOGGER = logging.getLogger(__name__)

FLOAT_REGEX = re.compile(r"\s*([-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?)")


@DATA_TYPE.register("float", matches=r"^[+-]?\d+\.\d+$")
class FloatDecoder:
    """Decode a float ICS value."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> float:
        """Parse a rfc5545 property into a float, or 0.0 when not numeric."""
        if not (match := FLOAT_REGEX.match(value)):
            _LOGGER.debug("Unable to parse value as float: '%s'", value)
            return 0.0
        return float(match.group(1))
