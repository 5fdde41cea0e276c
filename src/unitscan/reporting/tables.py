"""Tabular export of extraction results."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from ..extraction.descriptors import COLUMN_NAMES, UnitDescriptor

__all__ = ["results_to_frame", "write_table"]

TEXT_ID_COLUMN = "Text Id"

_SEPARATORS = {".csv": ",", ".tsv": "\t"}


def results_to_frame(results: Iterable[UnitDescriptor], *, text_id: Optional[str] = None) -> pd.DataFrame:
    """Return one row per descriptor, columns in display order.

    Rows are sorted so that identical result sets always render the same
    table. When ``text_id`` is given it is prepended as an extra column.
    """

    rows: List[tuple] = sorted(descriptor.row() for descriptor in results)
    frame = pd.DataFrame(rows, columns=list(COLUMN_NAMES))
    if text_id is not None:
        frame.insert(0, TEXT_ID_COLUMN, text_id)
    return frame


def write_table(frame: pd.DataFrame, path: Path) -> Path:
    """Write ``frame`` as CSV or TSV depending on the suffix of ``path``."""

    path = Path(path)
    separator = _SEPARATORS.get(path.suffix.lower())
    if separator is None:
        raise ValueError(f"Unsupported table format: '{path.suffix}'")
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, sep=separator, index=False)
    return path
