# fifo_ledger/controllers/reconcile.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

from fifo_ledger.data_model import (
    ColumnMapping,
    DirectionKeywords,
    ExcelSheet,
    Lot,
    Transaction,
)

from .aggregates import LotSummary, summarize_lots
from .fifo_matcher import match_lots
from .normalizer import normalize_rows

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    """Everything one reconciliation run produces."""

    transactions: Tuple[Transaction, ...]  # in FIFO order
    lots: Tuple[Lot, ...]  # in creation order
    summary: LotSummary
    row_count: int  # data rows handed in

    @property
    def excluded_count(self) -> int:
        """Rows dropped for an unusable direction or nominal."""
        return self.row_count - len(self.transactions)


def reconcile(
    rows: Union[ExcelSheet, Iterable[Sequence[object]]],
    mapping: ColumnMapping,
    keywords: Optional[DirectionKeywords] = None,
) -> ReconcileResult:
    """
    Rows → transactions → lots → summary, with no state kept between calls.

    ``mapping`` must come from `ColumnMapping.from_roles` (or
    `map_sheet_columns`); it is not re-validated here.
    """
    data = list(rows.rows if isinstance(rows, ExcelSheet) else rows)
    keywords = keywords or DirectionKeywords()

    txns = normalize_rows(data, mapping, keywords)
    lots = match_lots(txns)
    summary = summarize_lots(lots)

    log.info(
        "Reconciled %d transactions into %d lots (%d open, %d closed)",
        len(txns),
        summary.total_lots,
        summary.open_lots,
        summary.closed_lots,
    )
    return ReconcileResult(
        transactions=tuple(txns),
        lots=tuple(lots),
        summary=summary,
        row_count=len(data),
    )
