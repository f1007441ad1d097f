from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pandas as pd
import pytest

from fifo_ledger.utilities import (
    INVALID_DATE,
    InvalidDate,
    compare_contract,
    date_sort_key,
    format_date,
    format_qty,
    round_qty,
    to_datetime,
    to_quantity,
)
from fifo_ledger.utilities.converters_scalar import (
    excel_serial_to_datetime,
    natural_key,
    to_number,
)

# ---------- round_qty / format_qty ----------


@pytest.mark.parametrize(
    "raw,expected",
    [
        (Decimal("0.123456785"), Decimal("0.12345679")),  # half-up
        (Decimal("0.123456784"), Decimal("0.12345678")),
        (0.1 + 0.2, Decimal("0.30000000")),  # float noise removed
        (5, Decimal("5.00000000")),
        ("1.5", Decimal("1.50000000")),
    ],
)
def test_round_qty_quantizes_to_eight_places(raw, expected):
    assert round_qty(raw) == expected
    assert round_qty(raw).as_tuple().exponent == -8


@pytest.mark.parametrize(
    "value,expected",
    [
        (Decimal("100.00000000"), "100"),
        (Decimal("40.50000000"), "40.5"),
        (Decimal("0E-8"), "0"),
        (Decimal("0.00000001"), "0.00000001"),
    ],
)
def test_format_qty_plain_decimal(value, expected):
    assert format_qty(value) == expected


# ---------- to_quantity ----------


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("100", Decimal("100")),
        ("-3,188.32", Decimal("3188.32")),
        ("1,250.50 EUR", Decimal("1250.5")),
        ("  42  ", Decimal("42")),
        ("12-3", Decimal("12")),  # leading numeric prefix only
        ("1.2.3", Decimal("1.2")),
        ("-.5", Decimal("0.5")),
        (250, Decimal("250")),
        (-7.25, Decimal("7.25")),
        (Decimal("-0.000000015"), Decimal("0.000000015")),  # not rounded
        ("0.000000001", Decimal("1E-9")),
        ("100.123456789", Decimal("100.123456789")),
        (1e21, Decimal("1E+21")),
        ("123456789012345678901234567890.5", Decimal("123456789012345678901234567890.5")),
    ],
)
def test_to_quantity_parses_magnitude(raw, expected):
    assert to_quantity(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["", "n/a", "--5", "-", ".", "0", "-0.00", 0, 0.0, float("nan"), float("inf"),
     None, True, Decimal("-0"), "1" + "0" * 400],
)
def test_to_quantity_rejects_unusable_values(raw):
    assert to_quantity(raw) is None


# ---------- dates ----------


def test_excel_serial_matches_known_dates():
    # Arrange / Act / Assert
    assert excel_serial_to_datetime(44340) == datetime(2021, 5, 24)
    assert excel_serial_to_datetime(44340.5) == datetime(2021, 5, 24, 12, 0)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (datetime(2021, 5, 24, 9, 30), datetime(2021, 5, 24, 9, 30)),
        (date(2021, 5, 24), datetime(2021, 5, 24)),
        (pd.Timestamp("2021-05-24"), datetime(2021, 5, 24)),
        (44340, datetime(2021, 5, 24)),
        ("44340", datetime(2021, 5, 24)),
        ("2021-05-24", datetime(2021, 5, 24)),
        ("2021-05-24T10:15:00", datetime(2021, 5, 24, 10, 15)),
        ("24 May 2021", datetime(2021, 5, 24)),
        ("05/24/2021", datetime(2021, 5, 24)),
        ("May 24, 2021", datetime(2021, 5, 24)),
    ],
)
def test_to_datetime_accepts_typed_serial_and_text(raw, expected):
    assert to_datetime(raw) == expected


def test_to_datetime_makes_aware_values_naive_utc():
    aware = datetime(2021, 5, 24, 12, 0, tzinfo=timezone.utc)
    assert to_datetime(aware) == datetime(2021, 5, 24, 12, 0)
    assert to_datetime("2021-05-24T12:00:00Z") == datetime(2021, 5, 24, 12, 0)


@pytest.mark.parametrize("raw", [None, "", "   ", "not a date", pd.NaT, True, float("nan")])
def test_to_datetime_returns_sentinel_for_garbage(raw):
    result = to_datetime(raw)
    assert result is INVALID_DATE
    assert isinstance(result, InvalidDate)


def test_invalid_date_renders_and_sorts_last():
    assert format_date(INVALID_DATE) == "Invalid Date"
    assert str(INVALID_DATE) == "Invalid Date"
    assert format_date(datetime(2021, 5, 24, 13, 0)) == "2021-05-24"
    assert date_sort_key(datetime(9999, 12, 31)) < date_sort_key(INVALID_DATE)
    assert date_sort_key(INVALID_DATE) == date_sort_key(INVALID_DATE)


# ---------- contract codes ----------


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("2", "10", -1),  # numeric, not lexicographic
        ("10", "2", 1),
        ("7", "7", 0),
        ("2", "2.0", 0),
        ("1e2", "99", 1),
        ("", "5", 1),  # empty after non-empty
        ("5", "", -1),
        ("", "", 0),
        (None, "A", 1),
        ("A2", "A10", -1),  # natural order
        ("a10", "A2", 1),
        ("abc", "ABC", 0),  # case-insensitive
        ("café", "cafe", 0),  # accent-insensitive
        ("10", "A1", -1),  # digits before letters
        (" 3 ", "3", 0),  # trimmed
    ],
)
def test_compare_contract(a, b, expected):
    assert compare_contract(a, b) == expected


def test_compare_contract_is_antisymmetric_over_samples():
    samples = ["", "1", "2", "10", "A1", "a2", "A10", "B", "x-7", "0.5"]
    for a in samples:
        for b in samples:
            assert compare_contract(a, b) == -compare_contract(b, a)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("12", Decimal("12")),
        ("-1.5", Decimal("-1.5")),
        ("1e3", Decimal("1000")),
        ("12a", None),
        ("inf", None),
        ("nan", None),
        ("1_000", None),
        ("", None),
    ],
)
def test_to_number_requires_whole_string(text, expected):
    assert to_number(text) == expected


def test_natural_key_orders_digit_runs_by_value():
    codes = ["A10", "a2", "A1", "B0"]
    assert sorted(codes, key=natural_key) == ["A1", "a2", "A10", "B0"]


def test_round_qty_handles_nominals_beyond_default_precision():
    assert round_qty(Decimal("1E+21")) == Decimal("1E+21")
    assert round_qty(Decimal("123456789012345678901234.123456785")) == Decimal(
        "123456789012345678901234.12345679"
    )


@pytest.mark.parametrize("raw", ["10:30", "May 24", "24/05"])
def test_to_datetime_rejects_text_without_a_year(raw):
    # pandas would fill the gap from the run date or year 1
    assert to_datetime(raw) is INVALID_DATE


def test_to_datetime_pandas_fallback_with_year():
    assert to_datetime("2021 May 24") == datetime(2021, 5, 24)


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("a1", "a-1", -1),
        ("a-1", "a_1", -1),
        ("a1", "a_", -1),  # code point order, not locale collation
    ],
)
def test_compare_contract_punctuation_by_code_point(a, b, expected):
    assert compare_contract(a, b) == expected
    assert compare_contract(b, a) == -expected
