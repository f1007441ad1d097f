from __future__ import annotations

import pytest

from fifo_ledger.data_model import (
    Cell,
    ColumnMapping,
    auto_map_columns,
    resolve_column,
)
from fifo_ledger.exceptions import ColumnMappingError


def _mk_roles(**over):
    roles = {"date": 0, "direction": 1, "nominal": 2, "trn": 3, "cnc": 4, "pck": 5}
    roles.update(over)
    return roles


# ---------- from_roles ----------


def test_from_roles_accepts_complete_distinct_mapping():
    m = ColumnMapping.from_roles(_mk_roles(), column_count=6)
    assert m.as_dict() == _mk_roles()
    assert m.nominal == 2


def test_from_roles_rejects_missing_role():
    roles = _mk_roles()
    del roles["pck"]
    with pytest.raises(ColumnMappingError) as ei:
        ColumnMapping.from_roles(roles)
    assert ei.value.roles == ("pck",)
    assert str(ei.value) == "No column selected for: pck"


def test_from_roles_rejects_none_position():
    with pytest.raises(ColumnMappingError, match="No column selected for: trn"):
        ColumnMapping.from_roles(_mk_roles(trn=None))


def test_from_roles_rejects_shared_column():
    with pytest.raises(ColumnMappingError) as ei:
        ColumnMapping.from_roles(_mk_roles(cnc=3))
    assert set(ei.value.roles) == {"trn", "cnc"}


def test_from_roles_rejects_out_of_range():
    with pytest.raises(ColumnMappingError, match="out of range"):
        ColumnMapping.from_roles(_mk_roles(pck=9), column_count=6)
    with pytest.raises(ColumnMappingError, match="out of range"):
        ColumnMapping.from_roles(_mk_roles(date=-1))


def test_from_roles_rejects_unknown_role():
    with pytest.raises(ColumnMappingError, match="Unknown column roles: price"):
        ColumnMapping.from_roles(_mk_roles(price=6))


def test_cell_reads_short_row_as_missing():
    m = ColumnMapping.from_roles(_mk_roles())
    row = (Cell.of("2021-05-24"), Cell.of("buy"))
    assert m.cell(row, "direction").as_text() == "buy"
    assert m.cell(row, "pck").is_missing


# ---------- auto_map_columns ----------


def test_auto_map_recognises_typical_export_headers():
    headers = ["Trn.Nb", "Cnt.Nb", "Pck.Nb", "B/S", "Value Date", "Nominal 0", "Comment"]
    assert auto_map_columns(headers) == {
        "date": 4,
        "direction": 3,
        "nominal": 5,
        "trn": 0,
        "cnc": 1,
        "pck": 2,
    }


def test_auto_map_prefers_specific_patterns_over_generic():
    # "Quantity" beats the earlier generic "Amount"
    headers = ["Amount", "Quantity", "Trade Date", "Date"]
    proposal = auto_map_columns(headers)
    assert proposal["nominal"] == 1
    assert proposal["date"] == 3


def test_auto_map_leaves_unmatched_roles_out():
    assert auto_map_columns(["Foo", "Bar"]) == {}


def test_auto_map_simple_names():
    proposal = auto_map_columns(["date", "side", "qty", "TRN", "CNC", "PCK"])
    assert proposal == {"date": 0, "direction": 1, "nominal": 2, "trn": 3, "cnc": 4, "pck": 5}


# ---------- resolve_column ----------


@pytest.mark.parametrize(
    "ref,expected",
    [("Nominal", 1), ("  nominal ", 1), (2, 2), ("0", 0)],
)
def test_resolve_column(ref, expected):
    assert resolve_column(["Date", "Nominal", "Side"], ref) == expected


def test_resolve_column_unknown_name_raises():
    with pytest.raises(ColumnMappingError, match="No column named 'Price'"):
        resolve_column(["Date"], "Price")
