"""
.. include:: ../README.md
"""

__all__ = [
    "component",
    "compat",
    "design",
    "exceptions",
    "parsing",
    "property",
    "time",
    "timezone",
    "types",
]
