# fifo_ledger/data_model/excel/excel_cell.py
from __future__ import annotations

import numbers
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

import pandas as pd

from fifo_ledger.utilities import is_null_or_whitespace

from ..interfaces import EnumCellKind


@dataclass(frozen=True)
class Cell:
    """
    One raw sheet value tagged with what it holds.

    Readers hand back strings, numbers, dates and assorted "empty" markers
    (None, NaN, NaT, "") in the same column; `Cell.of` sorts them into
    TEXT / NUMBER / DATE / MISSING so the parsers downstream never guess.
    """

    kind: EnumCellKind
    value: object = None

    @classmethod
    def of(cls, raw: object) -> Cell:
        if isinstance(raw, Cell):
            return raw
        if raw is None or (pd.api.types.is_scalar(raw) and pd.isna(raw)):
            return cls.missing()
        if isinstance(raw, Decimal) and raw.is_nan():
            return cls.missing()
        if isinstance(raw, (datetime, date)):
            return cls(EnumCellKind.DATE, raw)
        if isinstance(raw, (numbers.Real, Decimal)) and not isinstance(raw, bool):
            return cls(EnumCellKind.NUMBER, raw)

        text = str(raw)
        if is_null_or_whitespace(text):
            return cls.missing()
        return cls(EnumCellKind.TEXT, text)

    @classmethod
    def missing(cls) -> Cell:
        return cls(EnumCellKind.MISSING, None)

    @property
    def is_missing(self) -> bool:
        return self.kind is EnumCellKind.MISSING

    def as_text(self) -> str:
        """Render the cell as a trimmed reference string ('' when missing)."""
        if self.kind is EnumCellKind.MISSING:
            return ""
        if self.kind is EnumCellKind.NUMBER:
            v = self.value
            # Integer-valued codes come back from Excel as floats
            if isinstance(v, float) and v.is_integer():
                return str(int(v))
            return str(v)
        if self.kind is EnumCellKind.DATE:
            v = self.value
            if isinstance(v, datetime):
                if v.time() == datetime.min.time():
                    return v.date().isoformat()
                return v.isoformat(sep=" ")
            return v.isoformat()  # type: ignore[union-attr]
        return str(self.value).strip()
