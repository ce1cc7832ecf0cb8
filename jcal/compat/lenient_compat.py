"""Compatibility layer for allowing mixed DATE and DATE-TIME values.

Some producers emit a DATE-TIME in a property declared as a DATE (or the
reverse) and may use dates inside a PERIOD. By default the value type is
trusted and the value is sliced at fixed widths. In lenient mode the length
of the value decides whether it is decoded as a date or a date-time.
"""

from collections.abc import Generator
import contextlib
import contextvars


_lenient_dates = contextvars.ContextVar("lenient_dates", default=False)


@contextlib.contextmanager
def enable_lenient_dates() -> Generator[None]:
    """Context manager to decode dates and date-times by their length."""
    token = _lenient_dates.set(True)
    try:
        yield
    finally:
        _lenient_dates.reset(token)


def is_lenient_dates_enabled() -> bool:
    """Check if lenient date decoding is enabled."""
    return _lenient_dates.get()
