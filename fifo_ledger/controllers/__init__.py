from .aggregates import LotSummary, filter_lots, running_remaining, summarize_lots
from .fifo_matcher import match_lots, verify_lot
from .lot_export import (
    CONTRIBUTOR_COLUMNS,
    ContributorRow,
    contributor_frame,
    flatten_contributor_rows,
    write_contributor_csv,
    write_contributor_excel,
)
from .normalizer import (
    compare_transactions,
    normalize_rows,
    order_transactions,
    resolve_date,
    resolve_direction,
    resolve_quantity,
)
from .reconcile import ReconcileResult, reconcile
from .sheet_loader import load_sheet, map_sheet_columns, sheet_from_frame

__all__ = [
    "LotSummary",
    "filter_lots",
    "running_remaining",
    "summarize_lots",
    "match_lots",
    "verify_lot",
    "CONTRIBUTOR_COLUMNS",
    "ContributorRow",
    "contributor_frame",
    "flatten_contributor_rows",
    "write_contributor_csv",
    "write_contributor_excel",
    "compare_transactions",
    "normalize_rows",
    "order_transactions",
    "resolve_date",
    "resolve_direction",
    "resolve_quantity",
    "ReconcileResult",
    "reconcile",
    "load_sheet",
    "map_sheet_columns",
    "sheet_from_frame",
]
