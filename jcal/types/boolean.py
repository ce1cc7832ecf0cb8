"""Library for parsing BOOLEAN values."""

import logging

from .data_types import DATA_TYPE

_LOGGER = logging.getLogger(__name__)


@DATA_TYPE.register("boolean", values=["TRUE", "FALSE"])
class BooleanDecoder:
    """Decode a boolean ICS value."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> bool:
        """Parse an rfc5545 property into a boolean.

        An unknown literal is not a reason to reject the whole document
        and is treated as false.
        """
        if value == "TRUE":
            return True
        if value != "FALSE":
            _LOGGER.debug("Unable to parse value as boolean: '%s'", value)
        return False
