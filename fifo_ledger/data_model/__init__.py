# fifo_ledger/data_model/__init__.py
from .column_mapping import (
    REQUIRED_ROLES,
    ROLE_LABELS,
    ColumnMapping,
    auto_map_columns,
    resolve_column,
)
from .direction_keywords import DirectionKeywords
from .excel import Cell, ExcelSheet
from .interfaces import (
    EnumCellKind, EnumDirection, EnumLotStatus, IToDict, RecursiveDictStr)
from .lot import Contribution, Lot
from .transaction import Transaction

__all__ = [
    "REQUIRED_ROLES", "ROLE_LABELS", "ColumnMapping", "auto_map_columns",
    "resolve_column", "DirectionKeywords", "Cell", "ExcelSheet",
    "EnumCellKind", "EnumDirection", "EnumLotStatus", "IToDict",
    "RecursiveDictStr", "Contribution", "Lot", "Transaction"]
