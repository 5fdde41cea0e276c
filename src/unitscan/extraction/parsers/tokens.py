"""Split free text into alternating digit runs and text runs."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from .numbers import is_numeric

__all__ = ["ScanState", "Token", "TokenKind", "scan_tokens", "tokenize"]

_PIECE_PATTERN = re.compile(r"\S+")


class TokenKind(str, Enum):
    """Run class a token was read from."""

    NUMERIC = "numeric"
    NON_NUMERIC = "non_numeric"


class ScanState(Enum):
    """State of the character-run scanner inside a whitespace piece."""

    UNSET = "unset"
    DIGITS = "digits"
    TEXT = "text"


@dataclass(frozen=True)
class Token:
    """Run of characters located in the source text."""

    start: int
    text: str
    kind: TokenKind

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    @property
    def is_numeric(self) -> bool:
        return is_numeric(self.text)


def _is_digit_char(ch: str) -> bool:
    # "." belongs to digit runs even when no digit surrounds it.
    return ch == "." or ch.isdecimal()


def _make_token(piece: str, offset: int, start: int, end: int, state: ScanState) -> Token:
    kind = TokenKind.NUMERIC if state is ScanState.DIGITS else TokenKind.NON_NUMERIC
    return Token(start=offset + start, text=piece[start:end], kind=kind)


def _scan_piece(piece: str, offset: int) -> Iterator[Token]:
    state = ScanState.UNSET
    run_start = 0
    for index, ch in enumerate(piece):
        next_state = ScanState.DIGITS if _is_digit_char(ch) else ScanState.TEXT
        if next_state is state:
            continue
        if state is not ScanState.UNSET:
            yield _make_token(piece, offset, run_start, index, state)
        state = next_state
        run_start = index
    if state is not ScanState.UNSET:
        yield _make_token(piece, offset, run_start, len(piece), state)


def scan_tokens(text: Optional[str]) -> Iterator[Token]:
    """Yield the digit and text runs of ``text`` with their offsets.

    The text is first split on whitespace; each piece is then cut wherever
    the scanner switches between a digit run (decimal digits and ``.``) and
    a text run, so ``"ab5.0mg"`` becomes ``"ab"``, ``"5.0"``, ``"mg"``.
    """

    if not text:
        return
    for match in _PIECE_PATTERN.finditer(text):
        yield from _scan_piece(match.group(0), match.start())


def tokenize(text: Optional[str]) -> List[str]:
    """Return the token strings of ``text`` in reading order."""

    return [token.text for token in scan_tokens(text)]
