"""Validated unit descriptors and the deduplicating result collection."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from .parsers.numbers import is_numeric

__all__ = [
    "AMBIGUOUS_UNIT_NAMES",
    "COLUMN_NAMES",
    "PUNCTUATION_UNIT_NAMES",
    "RawUnit",
    "ResultSet",
    "UnitDescriptor",
    "UnitRejection",
    "build_descriptor",
]

COLUMN_NAMES: Tuple[str, ...] = ("Value", "Parsed Text", "Name", "Symbol", "Dimension", "System Units")

PUNCTUATION_UNIT_NAMES = frozenset({"%", "'", '"'})

# atto / speed of light, "grade", kelvin, and "rd" (a misspelt rad) all show
# up far more often as noise than as real units next to a number.
AMBIGUOUS_UNIT_NAMES = frozenset({"a", "c", "grade", "K", "rd"})

_CURRENT_PATTERN = re.compile(r"current|(?<![A-Za-z])I(?![A-Za-z])")

Fingerprint = Tuple[str, str, str, str, str, str]


@dataclass(frozen=True)
class RawUnit:
    """Unit interpretation returned by an interpreter, not yet validated."""

    canonical_name: str
    dimension: str
    system_units: str
    symbol: Optional[str] = None


@dataclass(frozen=True)
class UnitDescriptor:
    """Numeric value paired with a validated unit interpretation."""

    raw_unit_text: str
    value: str
    canonical_name: str
    dimension: str
    system_units: str
    symbol: Optional[str] = None

    def row(self) -> Tuple[str, ...]:
        """Project the descriptor on :data:`COLUMN_NAMES`."""

        return (
            self.value or "",
            self.raw_unit_text or "",
            self.canonical_name or "",
            self.symbol or "",
            self.dimension or "",
            self.system_units or "",
        )

    @property
    def fingerprint(self) -> Fingerprint:
        return self.row()  # type: ignore[return-value]

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {
            "value": self.value,
            "parsed_text": self.raw_unit_text,
            "name": self.canonical_name,
            "symbol": self.symbol,
            "dimension": self.dimension,
            "system_units": self.system_units,
        }


@dataclass(frozen=True)
class UnitRejection:
    """Why a raw interpretation did not make it into a descriptor."""

    reason: str
    detail: str


DescriptorOutcome = Union[UnitDescriptor, UnitRejection]


def _rejection_reason(raw: RawUnit) -> Optional[UnitRejection]:
    name = raw.canonical_name
    if name is None or not name.strip():
        return UnitRejection("blank_name", "unit name is blank")
    if is_numeric(name):
        return UnitRejection("numeric_name", f"unit name {name!r} is a number")
    if name in PUNCTUATION_UNIT_NAMES:
        return UnitRejection("punctuation_name", f"unit name {name!r} is punctuation")
    if name in AMBIGUOUS_UNIT_NAMES:
        return UnitRejection("ambiguous_name", f"unit name {name!r} is ambiguous")
    if raw.dimension and _CURRENT_PATTERN.search(raw.dimension):
        return UnitRejection("electrical_current", f"dimension {raw.dimension!r} denotes electrical current")
    return None


def build_descriptor(raw_unit_text: str, value: str, raw: RawUnit) -> DescriptorOutcome:
    """Validate ``raw`` and return either a descriptor or the rejection."""

    rejection = _rejection_reason(raw)
    if rejection is not None:
        return rejection
    return UnitDescriptor(
        raw_unit_text=raw_unit_text,
        value=value,
        canonical_name=raw.canonical_name,
        symbol=raw.symbol,
        dimension=raw.dimension,
        system_units=raw.system_units,
    )


class ResultSet:
    """Unordered collection of descriptors, one per distinct field tuple."""

    def __init__(self, descriptors: Iterable[UnitDescriptor] = ()) -> None:
        self._items: Dict[Fingerprint, UnitDescriptor] = {}
        for descriptor in descriptors:
            self.add(descriptor)

    def add(self, descriptor: UnitDescriptor) -> None:
        self._items[descriptor.fingerprint] = descriptor

    def fingerprints(self) -> frozenset:
        return frozenset(self._items)

    def __iter__(self) -> Iterator[UnitDescriptor]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, UnitDescriptor):
            return item.fingerprint in self._items
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultSet):
            return NotImplemented
        return self.fingerprints() == other.fingerprints()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ResultSet({sorted(self._items)!r})"
