from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from fifo_ledger.utilities import DateValue

from .interfaces import EnumDirection


@dataclass(frozen=True)
class Transaction:
    """One normalized buy or sell. Lives only between the normalizer and the matcher."""

    date: DateValue  # INVALID_DATE when the cell would not parse
    direction: EnumDirection
    quantity: Decimal  # magnitude; sign comes from direction
    trn: str = ""
    cnc: str = ""
    pck: str = ""
    source_row: int = -1  # 1-based sheet row, header included
