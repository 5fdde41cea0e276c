"""Recognise numeric literals among scanned tokens."""
from __future__ import annotations

import re
from decimal import Decimal
from typing import Callable, Optional, Sequence

__all__ = ["is_numeric"]

# Tried in order, the first parser that accepts the whole token wins.
_NUMERIC_PARSERS: Sequence[Callable[[str], object]] = (float, Decimal, int)

# The only literals without a digit that count as numbers.
_SPECIAL_LITERALS = re.compile(r"[+-]?(?:NaN|Infinity)")


def _has_digit(token: str) -> bool:
    return any(ch.isdecimal() for ch in token)


def is_numeric(token: Optional[str]) -> bool:
    """Return ``True`` when ``token`` is a floating point literal.

    ``None`` and empty strings are never numeric. ``"NaN"`` and
    ``"Infinity"`` (optionally signed) are accepted with exactly that
    spelling; other digit-less words such as ``"nan"`` or ``"inf"`` are not,
    nor are spellings only Python accepts such as ``"1_000"``.
    """

    if not token or "_" in token:
        return False
    if not _has_digit(token):
        return _SPECIAL_LITERALS.fullmatch(token) is not None
    for parser in _NUMERIC_PARSERS:
        try:
            parser(token)
        except (ValueError, ArithmeticError, TypeError):
            continue
        return True
    return False
