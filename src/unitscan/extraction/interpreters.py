"""Adapters turning unit text into raw unit interpretations."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional, Protocol, Tuple

import pint

from .descriptors import RawUnit

__all__ = [
    "INTERPRETERS",
    "InterpreterFactory",
    "PintInterpreter",
    "StaticInterpreter",
    "UcumTableInterpreter",
    "UnitInterpreter",
    "get_interpreter_factory",
]

LOGGER = logging.getLogger(__name__)


class UnitInterpreter(Protocol):
    """Protocol implemented by unit parsing engines."""

    def interpret(self, text: str) -> Optional[RawUnit]:
        """Return the interpretation of ``text`` or ``None``.

        Implementations must not raise on malformed text; anything they cannot
        read is reported as ``None``.
        """


InterpreterFactory = Callable[[], UnitInterpreter]


# ---------------------------------------------------------------------------
# UCUM code table
# ---------------------------------------------------------------------------

# Base dimensions in the order they are printed.
_BASE_DIMENSIONS: Tuple[Tuple[str, str], ...] = (
    ("L", "m"),
    ("M", "kg"),
    ("T", "s"),
    ("I", "A"),
    ("Θ", "K"),
    ("N", "mol"),
    ("J", "cd"),
)

Exponents = Dict[str, float]


@dataclass(frozen=True)
class _Atom:
    exponents: Tuple[Tuple[str, int], ...]
    metric: bool


def _atom(spec: str, *, metric: bool) -> _Atom:
    exponents = []
    for part in filter(None, spec.split(".")):
        match = re.fullmatch(r"([A-ZΘ])(-?\d+)?", part)
        if match is None:
            raise ValueError(f"Invalid dimension spec '{spec}'")
        exponents.append((match.group(1), int(match.group(2) or 1)))
    return _Atom(exponents=tuple(exponents), metric=metric)


_UCUM_ATOMS: Dict[str, _Atom] = {
    # metric
    "m": _atom("L", metric=True),
    "g": _atom("M", metric=True),
    "s": _atom("T", metric=True),
    "L": _atom("L3", metric=True),
    "l": _atom("L3", metric=True),
    "mol": _atom("N", metric=True),
    "K": _atom("Θ", metric=True),
    "A": _atom("I", metric=True),
    "V": _atom("L2.M.T-3.I-1", metric=True),
    "Hz": _atom("T-1", metric=True),
    "N": _atom("L.M.T-2", metric=True),
    "Pa": _atom("L-1.M.T-2", metric=True),
    "J": _atom("L2.M.T-2", metric=True),
    "W": _atom("L2.M.T-3", metric=True),
    "cal": _atom("L2.M.T-2", metric=True),
    "bar": _atom("L-1.M.T-2", metric=True),
    "eq": _atom("N", metric=True),
    "U": _atom("N.T-1", metric=True),
    "cd": _atom("J", metric=True),
    "m[Hg]": _atom("L-1.M.T-2", metric=True),
    "m[H2O]": _atom("L-1.M.T-2", metric=True),
    # non metric
    "min": _atom("T", metric=False),
    "h": _atom("T", metric=False),
    "d": _atom("T", metric=False),
    "wk": _atom("T", metric=False),
    "mo": _atom("T", metric=False),
    "a": _atom("T", metric=False),
    "Cel": _atom("Θ", metric=False),
    "[degF]": _atom("Θ", metric=False),
    "[in_i]": _atom("L", metric=False),
    "[ft_i]": _atom("L", metric=False),
    "[lb_av]": _atom("M", metric=False),
    "[oz_av]": _atom("M", metric=False),
    "[IU]": _atom("", metric=False),
    "[iU]": _atom("", metric=False),
    "[drp]": _atom("L3", metric=False),
    "%": _atom("", metric=False),
}

_UCUM_PREFIXES: Tuple[str, ...] = (
    "da", "Y", "Z", "E", "P", "T", "G", "M", "k", "h", "d", "c", "m", "u", "µ", "n", "p", "f", "a", "z", "y",
)

# Common spellings that are not valid UCUM codes.
_UCUM_ALIASES: Dict[str, str] = {
    "mmHg": "mm[Hg]",
    "cmH2O": "cm[H2O]",
    "mcg": "ug",
    "cc": "cm3",
    "IU": "[IU]",
    "degF": "[degF]",
    "lb": "[lb_av]",
    "lbs": "[lb_av]",
    "oz": "[oz_av]",
    "in": "[in_i]",
    "ft": "[ft_i]",
    "hr": "h",
    "hrs": "h",
    "sec": "s",
    "mEq": "meq",
}

_ANNOTATION = re.compile(r"\{[^{}]*\}")
_TERM = re.compile(r"(?P<atom>(?:\[[^\]]*\]|[^\d+\-\[\]])+)(?P<exp>[+-]?\d+)?")


def _lookup_atom(code: str) -> Optional[_Atom]:
    atom = _UCUM_ATOMS.get(code)
    if atom is not None:
        return atom
    for prefix in _UCUM_PREFIXES:
        if code.startswith(prefix) and len(code) > len(prefix):
            candidate = _UCUM_ATOMS.get(code[len(prefix):])
            if candidate is not None and candidate.metric:
                return candidate
    return None


def _term_exponents(term: str) -> Optional[Exponents]:
    if term == "" or term == "1":
        return {}
    match = _TERM.fullmatch(term)
    if match is None:
        return None
    atom = _lookup_atom(match.group("atom"))
    if atom is None:
        return None
    power = int(match.group("exp") or 1)
    return {name: exp * power for name, exp in atom.exponents}


def _combine(target: Exponents, source: Exponents, sign: int) -> None:
    for name, exp in source.items():
        target[name] = target.get(name, 0) + sign * exp
        if target[name] == 0:
            del target[name]


def _split_terms(code: str) -> Iterable[Tuple[int, str]]:
    sign = 1
    buffer = []
    depth = 0
    for ch in code:
        if ch in "[{":
            depth += 1
        elif ch in "]}":
            depth -= 1
        if depth == 0 and ch in "./":
            yield sign, "".join(buffer)
            buffer = []
            sign = -1 if ch == "/" else 1
            continue
        buffer.append(ch)
    yield sign, "".join(buffer)


def _format_exponents(exponents: Exponents, *, symbols: bool) -> str:
    parts = []
    for name, unit in _BASE_DIMENSIONS:
        exp = exponents.get(name)
        if not exp:
            continue
        label = unit if symbols else name
        parts.append(label if exp == 1 else f"{label}{exp}")
    return ".".join(parts) or "1"


# ---------------------------------------------------------------------------
# pint
# ---------------------------------------------------------------------------

# pint dimension names mapped onto the base letters printed by both engines.
_PINT_DIMENSIONS: Dict[str, str] = {
    "[length]": "L",
    "[mass]": "M",
    "[time]": "T",
    "[current]": "I",
    "[temperature]": "Θ",
    "[substance]": "N",
    "[luminosity]": "J",
}


def _pint_exponents(dimensionality: Mapping[str, float]) -> Optional[Exponents]:
    exponents: Exponents = {}
    for name, exp in dimensionality.items():
        letter = _PINT_DIMENSIONS.get(name)
        if letter is None:
            return None
        exponents[letter] = int(exp) if float(exp).is_integer() else exp
    return exponents


class PintInterpreter(UnitInterpreter):
    """Interpret unit text with a private :class:`pint.UnitRegistry`.

    Dimension and system units are written in the same base-letter notation
    as :class:`UcumTableInterpreter` so that the two engines can be compared.
    Dimensions outside the seven SI bases keep pint's own spelling.
    """

    def __init__(self, registry: Optional[pint.UnitRegistry] = None) -> None:
        self._registry = registry if registry is not None else pint.UnitRegistry()

    def _symbol(self, unit: pint.Unit) -> Optional[str]:
        try:
            return self._registry.get_symbol(str(unit))
        except (pint.errors.PintError, AttributeError, KeyError, ValueError):
            return None

    def interpret(self, text: str) -> Optional[RawUnit]:
        if not text or not text.strip():
            return None
        try:
            unit = self._registry.parse_units(text)
            if str(unit) == "dimensionless":
                return None
            _, base_units = self._registry.get_base_units(unit)
            exponents = _pint_exponents(unit.dimensionality)
            if exponents is None:
                dimension = str(unit.dimensionality)
                system_units = format(base_units, "~C")
            else:
                dimension = _format_exponents(exponents, symbols=False)
                system_units = _format_exponents(exponents, symbols=True)
            return RawUnit(
                canonical_name=format(unit, "~C"),
                symbol=self._symbol(unit),
                dimension=dimension,
                system_units=system_units,
            )
        except Exception as exc:  # pint raises a wide range of parse errors
            LOGGER.debug("interpreter.pint.unparsed", extra={"text": text, "error": str(exc)})
            return None


class UcumTableInterpreter(UnitInterpreter):
    """Table-driven reader for the common subset of UCUM codes.

    Only atoms listed in the table are known. Metric atoms accept the SI
    prefixes, terms can carry an integer exponent (``cm3``) and are combined
    with ``.`` and ``/``; a curly-brace annotation reads as unity. Codes made
    only of annotations, unity or separators are not units. The reported
    dimension uses the UCUM base letters (``L-1.M.T-2``) and the system
    units the SI base codes (``m-1.kg.s-2``).
    """

    def __init__(self, aliases: Optional[Mapping[str, str]] = None) -> None:
        self._aliases = dict(_UCUM_ALIASES if aliases is None else aliases)

    def interpret(self, text: str) -> Optional[RawUnit]:
        if not text or not text.strip():
            return None
        code = self._aliases.get(text.strip(), text.strip())
        exponents: Exponents = {}
        atoms = 0
        for index, (sign, term) in enumerate(_split_terms(code)):
            # Only a leading "/" may leave an empty term behind (``/min``).
            if term == "" and (index > 0 or not code.startswith("/")):
                LOGGER.debug("interpreter.ucum.unparsed", extra={"text": text, "term": term})
                return None
            cleaned = _ANNOTATION.sub("", term)
            term_exponents = _term_exponents(cleaned)
            if term_exponents is None:
                LOGGER.debug("interpreter.ucum.unparsed", extra={"text": text, "term": term})
                return None
            if cleaned not in ("", "1"):
                atoms += 1
            _combine(exponents, term_exponents, sign)
        if not atoms:
            return None
        return RawUnit(
            canonical_name=code,
            symbol=None,
            dimension=_format_exponents(exponents, symbols=False),
            system_units=_format_exponents(exponents, symbols=True),
        )


class StaticInterpreter(UnitInterpreter):
    """Interpreter answering from a fixed mapping; handy for tests and fixtures."""

    def __init__(self, table: Mapping[str, RawUnit]) -> None:
        self._table = dict(table)
        self.calls: list[str] = []

    def interpret(self, text: str) -> Optional[RawUnit]:
        self.calls.append(text)
        return self._table.get(text)


INTERPRETERS: Dict[str, InterpreterFactory] = {
    "pint": PintInterpreter,
    "ucum": UcumTableInterpreter,
}


def get_interpreter_factory(name: str) -> InterpreterFactory:
    """Return the factory registered under ``name``."""

    try:
        return INTERPRETERS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(INTERPRETERS))
        raise KeyError(f"Unknown unit interpreter '{name}' (known: {known})") from None
