"""Pair numeric tokens with the token that follows them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Union

from .parsers.numbers import is_numeric
from .parsers.tokens import Token, TokenKind

__all__ = ["Candidate", "find_pairs"]

TokenLike = Union[Token, str]


@dataclass(frozen=True)
class Candidate:
    """Numeric value and the unit text that may qualify it."""

    value: Token
    unit: Token

    @property
    def value_text(self) -> str:
        return self.value.text

    @property
    def unit_text(self) -> str:
        return self.unit.text


def _as_token(item: TokenLike, position: int) -> Token:
    if isinstance(item, Token):
        return item
    kind = TokenKind.NUMERIC if is_numeric(item) else TokenKind.NON_NUMERIC
    # Bare strings carry no offsets, the sequence position stands in.
    return Token(start=position, text=item, kind=kind)


def _numeric(token: Optional[Token]) -> bool:
    return token is not None and is_numeric(token.text)


def find_pairs(tokens: Iterable[TokenLike]) -> Iterator[Candidate]:
    """Yield ``(value, unit)`` candidates in a single left-to-right pass.

    The first numeric token is paired with whatever follows it. Afterwards a
    window of two tokens slides over the sequence; runs of non-numeric tokens
    are skipped by sliding the window, and a pair is produced whenever the
    left token is numeric and differs textually from the right one. Nothing
    is filtered beyond that: blank or meaningless unit text is left to the
    reconciliation step.
    """

    items: List[Token] = [_as_token(item, index) for index, item in enumerate(tokens)]
    count = len(items)
    position = 0

    previous: Optional[Token] = None
    while not _numeric(previous) and position < count:
        previous = items[position]
        position += 1
    if position >= count or previous is None:
        return
    current = items[position]
    position += 1
    yield Candidate(value=previous, unit=current)

    while position < count:
        previous = current
        current = items[position]
        position += 1
        while not _numeric(previous) and position < count:
            previous = current
            current = items[position]
            position += 1
        if previous.text == current.text or not _numeric(previous):
            continue
        yield Candidate(value=previous, unit=current)
