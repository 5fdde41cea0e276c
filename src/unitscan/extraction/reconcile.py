"""Reconciliation of two unit interpreters into one result set."""
from __future__ import annotations

import logging
from typing import Optional

from .descriptors import RawUnit, ResultSet, UnitDescriptor, UnitRejection, build_descriptor
from .interpreters import UnitInterpreter

__all__ = ["ReconciliationPolicy", "is_redundant", "normalize_unit_text"]

LOGGER = logging.getLogger(__name__)

_PARENTHESES = frozenset({"(", ")"})

# "H" next to a number is an hour far more often than a henry.
_SUBSTITUTIONS = {"H": "h"}


def normalize_unit_text(unit_text: str) -> str:
    """Apply the fixed textual substitutions to ``unit_text``."""

    return _SUBSTITUTIONS.get(unit_text, unit_text)


def is_redundant(primary: UnitDescriptor, secondary: UnitDescriptor) -> bool:
    """Return ``True`` when ``secondary`` adds nothing over ``primary``.

    A single matching field among name, dimension and system units is enough
    to treat the secondary interpretation as a duplicate.
    """

    return (
        primary.canonical_name == secondary.canonical_name
        or primary.dimension == secondary.dimension
        or primary.system_units == secondary.system_units
    )


class ReconciliationPolicy:
    """Merge the answers of a primary and an optional secondary interpreter."""

    def __init__(self, primary: UnitInterpreter, secondary: Optional[UnitInterpreter] = None) -> None:
        self._primary = primary
        self._secondary = secondary

    @staticmethod
    def _ask(interpreter: Optional[UnitInterpreter], label: str, unit_text: str) -> Optional[RawUnit]:
        if interpreter is None:
            return None
        try:
            return interpreter.interpret(unit_text)
        except Exception as exc:  # interpreters must not abort the extraction
            LOGGER.debug(
                "reconcile.interpreter_failed",
                extra={"interpreter": label, "unit_text": unit_text, "error": str(exc)},
            )
            return None

    @staticmethod
    def _validate(label: str, value: str, unit_text: str, raw: Optional[RawUnit]) -> Optional[UnitDescriptor]:
        if raw is None:
            return None
        outcome = build_descriptor(unit_text, value, raw)
        if isinstance(outcome, UnitRejection):
            LOGGER.debug(
                f"reconcile.{label}_rejected",
                extra={"unit_text": unit_text, "reason": outcome.reason, "detail": outcome.detail},
            )
            return None
        return outcome

    def reconcile(self, value: str, unit_text: str, into: ResultSet) -> None:
        """Interpret ``unit_text`` and merge the valid answers into ``into``."""

        if not value or not value.strip() or not unit_text or not unit_text.strip():
            return
        if unit_text in _PARENTHESES:
            return

        unit_text = normalize_unit_text(unit_text)

        primary = self._validate("primary", value, unit_text, self._ask(self._primary, "primary", unit_text))
        secondary = self._validate("secondary", value, unit_text, self._ask(self._secondary, "secondary", unit_text))

        if primary is not None:
            into.add(primary)
            LOGGER.debug("reconcile.primary_accepted", extra={"fingerprint": primary.fingerprint})

        if secondary is None:
            return
        if primary is not None and is_redundant(primary, secondary):
            LOGGER.debug("reconcile.secondary_redundant", extra={"fingerprint": secondary.fingerprint})
            return
        into.add(secondary)
        LOGGER.debug("reconcile.secondary_accepted", extra={"fingerprint": secondary.fingerprint})
