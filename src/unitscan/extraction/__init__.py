"""Quantity extraction primitives.

Text is cut into digit and text runs (:mod:`.parsers`), numeric runs are
paired with the token that follows them (:mod:`.pairs`), and each pair is
read by two unit interpreters whose answers are validated and merged
(:mod:`.reconcile`) into a :class:`~.descriptors.ResultSet`.
"""

from .descriptors import (
    AMBIGUOUS_UNIT_NAMES,
    COLUMN_NAMES,
    RawUnit,
    ResultSet,
    UnitDescriptor,
    UnitRejection,
    build_descriptor,
)
from .engine import UnitExtractor, find_units_in_string
from .interpreters import (
    INTERPRETERS,
    PintInterpreter,
    StaticInterpreter,
    UcumTableInterpreter,
    UnitInterpreter,
    get_interpreter_factory,
)
from .pairs import Candidate, find_pairs
from .parsers import Token, TokenKind, is_numeric, scan_tokens, tokenize
from .reconcile import ReconciliationPolicy

__all__ = [
    "AMBIGUOUS_UNIT_NAMES",
    "COLUMN_NAMES",
    "Candidate",
    "INTERPRETERS",
    "PintInterpreter",
    "RawUnit",
    "ReconciliationPolicy",
    "ResultSet",
    "StaticInterpreter",
    "Token",
    "TokenKind",
    "UcumTableInterpreter",
    "UnitDescriptor",
    "UnitExtractor",
    "UnitInterpreter",
    "UnitRejection",
    "build_descriptor",
    "find_pairs",
    "find_units_in_string",
    "get_interpreter_factory",
    "is_numeric",
    "scan_tokens",
    "tokenize",
]
