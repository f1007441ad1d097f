"""
fifo_ledger: FIFO lot matching for buy/sell nominal transactions.

Typical use:

    sheet = load_sheet(Path("trades.xlsx"))
    mapping = map_sheet_columns(sheet)
    result = reconcile(sheet, mapping, DirectionKeywords("buy", "sell"))
    write_contributor_csv(flatten_contributor_rows(result.lots), Path("fifo_lots.csv"))
"""

from .controllers import (
    ContributorRow,
    LotSummary,
    ReconcileResult,
    filter_lots,
    flatten_contributor_rows,
    load_sheet,
    map_sheet_columns,
    match_lots,
    normalize_rows,
    reconcile,
    running_remaining,
    summarize_lots,
    write_contributor_csv,
    write_contributor_excel,
)
from .data_model import (
    Cell,
    ColumnMapping,
    Contribution,
    DirectionKeywords,
    EnumDirection,
    EnumLotStatus,
    ExcelSheet,
    Lot,
    Transaction,
)
from .exceptions import (
    ColumnMappingError,
    FifoLedgerError,
    LotInvariantError,
    SheetLoadError,
)

__version__ = "0.1.0"

__all__ = [
    "ContributorRow",
    "LotSummary",
    "ReconcileResult",
    "filter_lots",
    "flatten_contributor_rows",
    "load_sheet",
    "map_sheet_columns",
    "match_lots",
    "normalize_rows",
    "reconcile",
    "running_remaining",
    "summarize_lots",
    "write_contributor_csv",
    "write_contributor_excel",
    "Cell",
    "ColumnMapping",
    "Contribution",
    "DirectionKeywords",
    "EnumDirection",
    "EnumLotStatus",
    "ExcelSheet",
    "Lot",
    "Transaction",
    "ColumnMappingError",
    "FifoLedgerError",
    "LotInvariantError",
    "SheetLoadError",
]
