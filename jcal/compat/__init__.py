"""Compatibility layer for parsing content that bends the rfc5545 rules.

This module provides context managers that relax how some values are
decoded, for producers that are known to emit slightly invalid content.
"""

from .lenient_compat import enable_lenient_dates

__all__ = [
    "enable_lenient_dates",
]
