"""Library for parsing INTEGER values."""

import logging

from jcal.util import parse_int_prefix

from .data_types import DATA_TYPE

_LOGGER = logging.getLogger(__name__)


@DATA_TYPE.register("integer")
class IntDecoder:
    """Decode an int ICS value."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> int:
        """Parse a rfc5545 int value, or 0 when it is not numeric."""
        if (result := parse_int_prefix(value)) is None:
            _LOGGER.debug("Unable to parse value as integer: '%s'", value)
            return 0
        return result
