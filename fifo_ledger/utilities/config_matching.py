# fifo_ledger/utilities/config_matching.py
from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Final

# Every quantity update (not the parsed input) is quantized to this many places.
QTY_DECIMALS: Final[int] = 8
QTY_QUANTUM: Final[Decimal] = Decimal(1).scaleb(-QTY_DECIMALS)
# Wide enough for any float nominal (1.8e308) plus the decimal places.
QTY_PRECISION: Final[int] = 400
QTY_CONTEXT: Final[Context] = Context(prec=QTY_PRECISION, rounding=ROUND_HALF_UP)

DEFAULT_BUY_KEYWORD: Final[str] = "buy"
DEFAULT_SELL_KEYWORD: Final[str] = "sell"

# Data row i (0-based) is sheet row i + 2: 1-based numbering plus the header.
HEADER_ROW_OFFSET: Final[int] = 2

# Bare numbers strictly inside this range are read as Excel serial days.
EXCEL_SERIAL_MIN: Final[int] = 10_000
EXCEL_SERIAL_MAX: Final[int] = 100_000
# Day 0 of the 1900 date system, shifted to absorb the Lotus 1-2-3 leap bug.
EXCEL_EPOCH: Final[datetime] = datetime(1899, 12, 30)

INVALID_DATE_TEXT: Final[str] = "Invalid Date"
