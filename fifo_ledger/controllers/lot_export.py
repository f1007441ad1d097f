#!/usr/bin/env python3
"""
Lot ledger exports

Features:
- Flatten lots into one row per (lot, contributor) pair
- Writers:
  * CSV (path or text stream)
  * pandas DataFrame
  * Excel workbook (.xlsx, via openpyxl)

Column order is a compatibility surface for downstream spreadsheets; see
CONTRIBUTOR_COLUMNS.
"""

from __future__ import annotations

import csv
import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Iterable, List, TextIO, Union

import pandas as pd

from fifo_ledger.data_model import EnumDirection, EnumLotStatus, Lot
from fifo_ledger.utilities import DateValue, format_date, format_qty, open_for_write

from .aggregates import running_remaining

CONTRIBUTOR_COLUMNS = [
    "Lot",
    "Side",
    "Status",
    "Lot Date",
    "Open Qty",
    "Contributor Direction",
    "Contributor Qty",
    "Remaining After",
    "Contributor Date",
    "TRN",
    "CNC",
    "PCK",
    "Source Row",
]

_QTY_COLUMNS = ("Open Qty", "Contributor Qty", "Remaining After")
DEFAULT_SHEET_NAME = "FIFO Lots"


@dataclass(frozen=True)
class ContributorRow:
    """One contributor of one lot, with the lot's identity alongside."""

    lot_id: int
    side: EnumDirection
    status: EnumLotStatus
    lot_date: DateValue
    lot_open_qty: Decimal
    lot_trn: str
    lot_cnc: str
    lot_pck: str
    direction: EnumDirection
    qty: Decimal
    remaining_after: Decimal
    date: DateValue
    trn: str
    cnc: str
    pck: str
    source_row: int

    def as_record(self) -> List[Union[str, int]]:
        """Values in CONTRIBUTOR_COLUMNS order, formatted for text output."""
        return [
            self.lot_id,
            str(self.side),
            str(self.status),
            format_date(self.lot_date),
            format_qty(self.lot_open_qty),
            str(self.direction),
            format_qty(self.qty),
            format_qty(self.remaining_after),
            format_date(self.date),
            self.trn,
            self.cnc,
            self.pck,
            self.source_row,
        ]


def flatten_contributor_rows(lots: Iterable[Lot]) -> List[ContributorRow]:
    """One `ContributorRow` per contributor, lots in order, contributors in ledger order."""
    out: List[ContributorRow] = []
    for lot in lots:
        for c, after in zip(lot.contributors, running_remaining(lot)):
            out.append(
                ContributorRow(
                    lot_id=lot.id,
                    side=lot.side,
                    status=lot.status,
                    lot_date=lot.date,
                    lot_open_qty=lot.open_qty,
                    lot_trn=lot.trn,
                    lot_cnc=lot.cnc,
                    lot_pck=lot.pck,
                    direction=c.direction,
                    qty=c.qty,
                    remaining_after=after,
                    date=c.date,
                    trn=c.trn,
                    cnc=c.cnc,
                    pck=c.pck,
                    source_row=c.source_row,
                )
            )
    return out


# ------------------------ Writers ------------------------


def write_contributor_csv(
    rows: Iterable[ContributorRow],
    out: Union[str, os.PathLike, TextIO],
    encoding: str = "utf-8",
) -> None:
    """
    Write contributor rows as CSV to either:
      - a filesystem path (str/PathLike), or
      - a text stream with .write() (e.g., io.StringIO)
    Every field is quoted.
    """
    if hasattr(out, "write") and callable(getattr(out, "write")):
        _write_csv_to_stream(rows, out)  # type: ignore[arg-type]
        return

    with open_for_write(Path(out), encoding=encoding, newline="") as fp:
        _write_csv_to_stream(rows, fp)


def _write_csv_to_stream(rows: Iterable[ContributorRow], fp: TextIO) -> None:
    w = csv.writer(fp, quoting=csv.QUOTE_ALL, lineterminator="\n")
    w.writerow(CONTRIBUTOR_COLUMNS)
    for r in rows:
        w.writerow(r.as_record())


def contributor_frame(rows: Iterable[ContributorRow]) -> pd.DataFrame:
    """Contributor rows as a DataFrame; quantity columns numeric, dates as text."""
    records = [r.as_record() for r in rows]
    df = pd.DataFrame(records, columns=CONTRIBUTOR_COLUMNS)
    for col in _QTY_COLUMNS:
        df[col] = pd.to_numeric(df[col])
    return df


def write_contributor_excel(
    rows: Iterable[ContributorRow],
    out_path: Path,
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> None:
    """Write contributor rows to a single-sheet .xlsx workbook (requires openpyxl)."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    contributor_frame(rows).to_excel(
        out_path, sheet_name=sheet_name, index=False, engine="openpyxl"
    )
