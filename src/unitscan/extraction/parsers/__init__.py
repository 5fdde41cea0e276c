"""Parser primitives for quantity extraction."""

from .numbers import is_numeric
from .tokens import ScanState, Token, TokenKind, scan_tokens, tokenize

__all__ = [
    "ScanState",
    "Token",
    "TokenKind",
    "is_numeric",
    "scan_tokens",
    "tokenize",
]
