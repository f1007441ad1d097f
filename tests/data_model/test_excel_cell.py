from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pandas as pd
import pytest

from fifo_ledger.data_model import Cell, EnumCellKind, ExcelSheet

# ---------- Cell.of ----------


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", float("nan"), pd.NA, pd.NaT, Decimal("NaN")],
)
def test_cell_of_empty_markers_are_missing(raw):
    cell = Cell.of(raw)
    assert cell.kind is EnumCellKind.MISSING
    assert cell.is_missing
    assert cell.as_text() == ""


@pytest.mark.parametrize(
    "raw,kind",
    [
        (datetime(2021, 5, 24, 9, 0), EnumCellKind.DATE),
        (date(2021, 5, 24), EnumCellKind.DATE),
        (pd.Timestamp("2021-05-24"), EnumCellKind.DATE),
        (42, EnumCellKind.NUMBER),
        (4.5, EnumCellKind.NUMBER),
        (pd.Series([4.5]).iloc[0], EnumCellKind.NUMBER),
        (Decimal("1.25"), EnumCellKind.NUMBER),
        ("buy", EnumCellKind.TEXT),
        (True, EnumCellKind.TEXT),  # bools are not quantities
    ],
)
def test_cell_of_classifies_payload(raw, kind):
    assert Cell.of(raw).kind is kind


def test_cell_of_passes_cells_through():
    c = Cell.of("x")
    assert Cell.of(c) is c


# ---------- as_text ----------


@pytest.mark.parametrize(
    "raw,expected",
    [
        (12345.0, "12345"),  # Excel hands integer codes back as floats
        (12.5, "12.5"),
        (7, "7"),
        ("  ABC-1 ", "ABC-1"),
        (datetime(2021, 5, 24), "2021-05-24"),
        (datetime(2021, 5, 24, 10, 30), "2021-05-24 10:30:00"),
        (date(2021, 5, 24), "2021-05-24"),
    ],
)
def test_cell_as_text(raw, expected):
    assert Cell.of(raw).as_text() == expected


# ---------- ExcelSheet ----------


def test_sheet_from_values_drops_blank_rows_and_pads_short_ones():
    # Arrange
    headers = [" Date ", "B/S", None]
    rows = [
        ["2021-05-24", "buy", 10],
        [None, "", float("nan")],  # blank, dropped
        ["2021-05-25", "sell"],  # short, padded
    ]

    # Act
    sheet = ExcelSheet.from_values(headers, rows)

    # Assert
    assert sheet.headers == ("Date", "B/S", "")
    assert sheet.column_count == 3
    assert len(sheet) == 2
    assert sheet.rows[1][2].is_missing
    assert sheet.rows[0][2] == Cell(EnumCellKind.NUMBER, 10)
