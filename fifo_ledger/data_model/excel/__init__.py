# fifo_ledger/data_model/excel/__init__.py
from .excel_cell import Cell
from .excel_sheet import ExcelSheet

__all__ = ["Cell", "ExcelSheet"]
