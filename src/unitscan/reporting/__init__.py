"""Report helpers for extraction results."""
from __future__ import annotations

from .tables import results_to_frame, write_table

__all__ = ["results_to_frame", "write_table"]
