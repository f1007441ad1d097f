# fifo_ledger/controllers/normalizer.py
"""
Raw sheet rows → ordered transactions.

Each row is read through a `ColumnMapping`: the direction cell decides buy or
sell, the nominal cell gives the quantity, the date cell the value date, and
three reference codes are copied as text. Rows without a usable direction or
quantity are dropped; rows with an unreadable date are kept under the
`INVALID_DATE` sentinel.

The result is sorted once, by date, then contract code, then sheet row. That
order alone decides FIFO precedence downstream.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from functools import cmp_to_key
from typing import Iterable, List, Optional, Sequence

from fifo_ledger.data_model import (
    Cell,
    ColumnMapping,
    DirectionKeywords,
    EnumCellKind,
    EnumDirection,
    Transaction,
)
from fifo_ledger.utilities import (
    INVALID_DATE,
    DateValue,
    InvalidDate,
    compare_contract,
    date_sort_key,
    to_datetime,
    to_quantity,
)
from fifo_ledger.utilities.config_matching import HEADER_ROW_OFFSET

log = logging.getLogger(__name__)


# --- Per-cell resolution -----------------------------------------------------


def resolve_direction(
    cell: Cell, keywords: DirectionKeywords
) -> Optional[EnumDirection]:
    """Classify a direction cell by keyword substring (case-insensitive).

    Returns
    -------
    Optional[EnumDirection]
        BUY or SELL when exactly one keyword occurs in the cell text; ``None``
        when neither or both do.
    """
    text = cell.as_text().lower()
    is_buy = keywords.buy in text
    is_sell = keywords.sell in text
    if is_buy == is_sell:
        return None
    return EnumDirection.BUY if is_buy else EnumDirection.SELL


def resolve_quantity(cell: Cell) -> Optional[Decimal]:
    """Positive rounded magnitude of a nominal cell, or ``None`` if unusable."""
    if cell.kind is EnumCellKind.NUMBER:
        return to_quantity(cell.value)
    if cell.kind is EnumCellKind.TEXT:
        return to_quantity(cell.as_text())
    return None


def resolve_date(cell: Cell) -> DateValue:
    """Value date of a row; ``INVALID_DATE`` when missing or unparseable."""
    if cell.is_missing:
        return INVALID_DATE
    return to_datetime(cell.value)


# --- Ordering ----------------------------------------------------------------


def compare_transactions(a: Transaction, b: Transaction) -> int:
    """
    Total order for FIFO precedence:
      • date ascending (invalid dates after all valid ones)
      • then contract code via `compare_contract`
      • then original sheet row
    """
    a_key, b_key = date_sort_key(a.date), date_sort_key(b.date)
    if a_key != b_key:
        return -1 if a_key < b_key else 1
    by_contract = compare_contract(a.cnc, b.cnc)
    if by_contract:
        return by_contract
    return (a.source_row > b.source_row) - (a.source_row < b.source_row)


def order_transactions(txns: Iterable[Transaction]) -> List[Transaction]:
    return sorted(txns, key=cmp_to_key(compare_transactions))


# --- Rows → transactions -----------------------------------------------------


def normalize_rows(
    rows: Iterable[Sequence[object]],
    mapping: ColumnMapping,
    keywords: DirectionKeywords,
) -> List[Transaction]:
    """Convert raw rows into the ordered transaction sequence.

    Parameters
    ----------
    rows : Iterable[Sequence[object]]
        Data rows (header excluded), as `Cell`s or raw values.
    mapping : ColumnMapping
        Validated role → column assignment.
    keywords : DirectionKeywords
        Buy and sell markers.

    Returns
    -------
    List[Transaction]
        Usable rows only, in FIFO order. ``source_row`` is the row's position
        plus the header offset (first data row → 2).

    Notes
    -----
    Dropped rows are not reported to the caller; they are logged at DEBUG
    and counted at INFO.
    """
    if keywords.overlapping:
        log.warning(
            "Direction keywords overlap (buy=%r, sell=%r); rows matching both are dropped",
            keywords.buy,
            keywords.sell,
        )

    txns: List[Transaction] = []
    seen = 0
    for i, row in enumerate(rows):
        seen += 1
        source_row = i + HEADER_ROW_OFFSET

        direction_cell = mapping.cell(row, "direction")
        direction = resolve_direction(direction_cell, keywords)
        if direction is None:
            log.debug(
                "Row %d dropped: direction %r matches no single keyword",
                source_row,
                direction_cell.as_text(),
            )
            continue

        nominal_cell = mapping.cell(row, "nominal")
        quantity = resolve_quantity(nominal_cell)
        if quantity is None:
            log.debug(
                "Row %d dropped: nominal %r is not a positive number",
                source_row,
                nominal_cell.as_text(),
            )
            continue

        date_cell = mapping.cell(row, "date")
        value_date = resolve_date(date_cell)
        if isinstance(value_date, InvalidDate):
            log.debug(
                "Row %d kept with invalid date %r", source_row, date_cell.as_text()
            )

        txns.append(
            Transaction(
                date=value_date,
                direction=direction,
                quantity=quantity,
                trn=mapping.cell(row, "trn").as_text(),
                cnc=mapping.cell(row, "cnc").as_text(),
                pck=mapping.cell(row, "pck").as_text(),
                source_row=source_row,
            )
        )

    excluded = seen - len(txns)
    if excluded:
        log.info("Excluded %d of %d rows without a usable direction or nominal", excluded, seen)
    log.debug("Normalized %d transactions", len(txns))
    return order_transactions(txns)
