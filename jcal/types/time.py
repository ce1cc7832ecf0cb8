"""Library for parsing TIME values."""

from .data_types import DATA_TYPE


@DATA_TYPE.register("time")
class TimeDecoder:
    """Decode an rfc5545 TIME."""

    @classmethod
    def __from_ical__(cls, value: str, escape: str | None = None) -> str:
        """Convert HHMMSS(Z)? to HH:MM:SS(Z)?, passing short values through."""
        if len(value) < 6:
            return value
        result = f"{value[0:2]}:{value[2:4]}:{value[4:6]}"
        if value[6:7] == "Z":
            result += "Z"
        return result
