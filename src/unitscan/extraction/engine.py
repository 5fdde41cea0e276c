"""Top-level quantity extraction pipeline."""
from __future__ import annotations

import logging
from typing import Optional

from ..config import ExtractorSettings
from .descriptors import ResultSet
from .interpreters import InterpreterFactory, PintInterpreter, UcumTableInterpreter, get_interpreter_factory
from .pairs import find_pairs
from .parsers.tokens import scan_tokens
from .reconcile import ReconciliationPolicy

__all__ = ["UnitExtractor", "find_units_in_string"]

LOGGER = logging.getLogger(__name__)


class UnitExtractor:
    """Find ``value unit`` expressions in free text.

    Interpreters are not assumed to be safe for reuse, so a fresh pair is
    built from the factories on every call to :meth:`find_units`.
    """

    def __init__(
        self,
        primary_factory: InterpreterFactory = PintInterpreter,
        secondary_factory: Optional[InterpreterFactory] = UcumTableInterpreter,
    ) -> None:
        self._primary_factory = primary_factory
        self._secondary_factory = secondary_factory

    @classmethod
    def from_settings(cls, settings: ExtractorSettings) -> "UnitExtractor":
        """Build an extractor using the interpreters named in ``settings``."""

        secondary = settings.secondary_interpreter
        return cls(
            primary_factory=get_interpreter_factory(settings.primary_interpreter),
            secondary_factory=get_interpreter_factory(secondary) if secondary else None,
        )

    def _policy(self) -> ReconciliationPolicy:
        secondary = self._secondary_factory() if self._secondary_factory is not None else None
        return ReconciliationPolicy(self._primary_factory(), secondary)

    def find_units(self, text: Optional[str]) -> ResultSet:
        results = ResultSet()
        tokens = list(scan_tokens(text))
        candidates = list(find_pairs(tokens))
        if not candidates:
            return results

        policy = self._policy()
        for candidate in candidates:
            policy.reconcile(candidate.value_text, candidate.unit_text, results)
        pairs = len(candidates)
        LOGGER.debug(
            "engine.find_units",
            extra={"tokens": len(tokens), "pairs": pairs, "results": len(results)},
        )
        return results


def find_units_in_string(text: Optional[str], *, extractor: Optional[UnitExtractor] = None) -> ResultSet:
    """Return the units found next to numeric values in ``text``."""

    return (extractor or UnitExtractor()).find_units(text)
