"""Library for parsing BINARY values."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jcal.exceptions import CalendarParseError

from .data_types import DATA_TYPE, VCARD3_DATA_TYPE

if TYPE_CHECKING:
    from jcal.property import Property


@DATA_TYPE.register("binary")
@VCARD3_DATA_TYPE.register("binary")
@dataclass(frozen=True)
class Binary:
    """An opaque binary payload, typically base64 encoded inline data."""

    value: str

    def __str__(self) -> str:
        """Return the payload as it appeared in the content."""
        return self.value

    def decode(self) -> bytes:
        """Return the bytes of a base64 encoded payload."""
        try:
            return base64.b64decode(self.value, validate=True)
        except binascii.Error as err:
            raise CalendarParseError(
                "Binary value is not valid base64", detailed_error=str(err)
            ) from err

    @classmethod
    def __decorate__(cls, value: Any, prop: Property | None = None) -> Binary:
        """Wrap the payload in a Binary."""
        return cls(value)
