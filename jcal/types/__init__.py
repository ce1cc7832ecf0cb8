"""Library for decoding rfc5545 and rfc6350 Property Value Data Types."""

# Import all types for the registry
from . import boolean, date, date_time, integer, text, time  # noqa: F401
from . import float as float_pkg  # noqa: F401
from . import vcard  # noqa: F401
from .binary import Binary
from .duration import Duration
from .period import Period
from .recur import Frequency, Recur
from .uri import CalAddress, Uri
from .utc_offset import UtcOffset

__all__ = [
    "Binary",
    "CalAddress",
    "Duration",
    "Frequency",
    "Period",
    "Recur",
    "Uri",
    "UtcOffset",
]
