"""
Workbook / CSV ingestion.

Reads the first (or a chosen) worksheet with pandas, keeps the header row
and every non-blank data row, and tags each cell. Column roles are then
proposed from the headers and may be overridden per role.
"""

# fifo_ledger/controllers/sheet_loader.py
from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Mapping, Optional, Union

import pandas as pd

from fifo_ledger.data_model import (
    ColumnMapping,
    ExcelSheet,
    auto_map_columns,
    resolve_column,
)
from fifo_ledger.exceptions import SheetLoadError

log = logging.getLogger(__name__)

EXCEL_SUFFIXES = (".xlsx", ".xlsm", ".xls")
CSV_SUFFIXES = (".csv",)


def load_sheet(path: Path, sheet: Union[int, str] = 0) -> ExcelSheet:
    """Load one worksheet (or a CSV file) into an `ExcelSheet`.

    Parameters
    ----------
    path : Path
        Workbook (.xlsx/.xlsm/.xls) or .csv file. The first row is the header.
    sheet : int | str, optional
        Worksheet position or name; ignored for CSV. Defaults to the first sheet.

    Returns
    -------
    ExcelSheet
        Trimmed headers and the non-blank data rows, cells tagged.

    Raises
    ------
    SheetLoadError
        If the suffix is unsupported, the file cannot be parsed, or it has
        no data rows.

    Notes
    -----
    - Excel cells keep their native types (dates stay dates, numbers stay numbers).
    - CSV cells are all read as text.
    - Requires pandas (and an Excel engine such as openpyxl).
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in EXCEL_SUFFIXES + CSV_SUFFIXES:
        raise SheetLoadError(f"Unsupported file type: {suffix or '(none)'}")

    try:
        if suffix in CSV_SUFFIXES:
            df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False)
        else:
            df = pd.read_excel(path, sheet_name=sheet, header=None, dtype=object)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise SheetLoadError(f"Failed to parse file: {e}") from e

    result = sheet_from_frame(df)
    log.info(
        "Loaded %s: %d data rows x %d columns",
        path,
        len(result.rows),
        result.column_count,
    )
    return result


def sheet_from_frame(df: pd.DataFrame) -> ExcelSheet:
    """Split a header-less DataFrame into header row and data rows."""
    if len(df.index) < 2:
        raise SheetLoadError("File has no data rows.")
    values = df.astype(object).values.tolist()
    return ExcelSheet.from_values(values[0], values[1:])


def map_sheet_columns(
    sheet: ExcelSheet,
    overrides: Optional[Mapping[str, Union[str, int]]] = None,
) -> ColumnMapping:
    """Auto-map roles from the headers, apply overrides, and validate.

    Parameters
    ----------
    sheet : ExcelSheet
        Loaded sheet.
    overrides : Mapping[str, str | int], optional
        Role → header name or 0-based position; wins over the heuristic.

    Raises
    ------
    ColumnMappingError
        If a role stays unmapped, two roles share a column, or an override
        names a header that does not exist.
    """
    roles = dict(auto_map_columns(sheet.headers))
    log.debug("Auto-mapped columns: %s", roles)
    for role, ref in (overrides or {}).items():
        roles[role] = resolve_column(sheet.headers, ref)
    return ColumnMapping.from_roles(roles, column_count=sheet.column_count)
