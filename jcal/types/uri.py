"""Library for URI and CAL-ADDRESS values.

Both are kept as the raw string. A calendar user address is a URI
(e.g. `mailto:jane@example.com`) and needs no further decoding.
"""

from .data_types import DATA_TYPE


@DATA_TYPE.register("uri")
class Uri(str):
    """A value type for a property that contains a uniform resource identifier."""


@DATA_TYPE.register("cal-address")
class CalAddress(str):
    """A value type for a property that contains a calendar user address."""
