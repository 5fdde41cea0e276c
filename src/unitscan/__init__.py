"""unitscan – quantity and unit extraction from free text."""

from ._version import __version__
from .extraction.engine import UnitExtractor, find_units_in_string

__all__ = [
    "__version__",
    "UnitExtractor",
    "find_units_in_string",
    "cli",
    "config",
    "extraction",
    "reporting",
    "utils",
]
