from pathlib import Path

import pandas as pd
import pytest

from unitscan.extraction.descriptors import COLUMN_NAMES, ResultSet, UnitDescriptor
from unitscan.reporting.tables import TEXT_ID_COLUMN, results_to_frame, write_table


def _results() -> ResultSet:
    return ResultSet(
        [
            UnitDescriptor(raw_unit_text="mg", value="120", canonical_name="mg", symbol="mg", dimension="[mass]", system_units="kg"),
            UnitDescriptor(raw_unit_text="h", value="2", canonical_name="h", dimension="T", system_units="s"),
        ]
    )


def test_results_to_frame_orders_columns_and_rows() -> None:
    frame = results_to_frame(_results())
    assert list(frame.columns) == list(COLUMN_NAMES)
    assert frame["Value"].tolist() == ["120", "2"]
    assert frame.loc[frame["Value"] == "2", "Symbol"].item() == ""


def test_results_to_frame_with_text_id() -> None:
    frame = results_to_frame(_results(), text_id="doc-1")
    assert frame.columns[0] == TEXT_ID_COLUMN
    assert set(frame[TEXT_ID_COLUMN]) == {"doc-1"}


def test_empty_results_give_empty_frame() -> None:
    frame = results_to_frame(ResultSet())
    assert frame.empty
    assert list(frame.columns) == list(COLUMN_NAMES)


@pytest.mark.parametrize("suffix, separator", [(".csv", ","), (".tsv", "\t")])
def test_write_table(tmp_path: Path, suffix: str, separator: str) -> None:
    path = write_table(results_to_frame(_results()), tmp_path / "out" / f"units{suffix}")
    loaded = pd.read_csv(path, sep=separator, dtype=str, keep_default_na=False)
    assert loaded.shape == (2, len(COLUMN_NAMES))
    assert set(loaded["Name"]) == {"mg", "h"}


def test_write_table_rejects_unknown_suffix(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        write_table(results_to_frame(_results()), tmp_path / "units.xlsx")
