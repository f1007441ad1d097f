# fifo_ledger/utilities/converters_scalar.py
from __future__ import annotations

import math
import re
import unicodedata
import warnings
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from enum import Enum
from typing import ContextManager, Final, Optional, Tuple, Union

import pandas as pd
from typing_extensions import TypeAlias

from .config_matching import (
    EXCEL_EPOCH,
    EXCEL_SERIAL_MAX,
    EXCEL_SERIAL_MIN,
    INVALID_DATE_TEXT,
    QTY_CONTEXT,
    QTY_DECIMALS,
    QTY_PRECISION,
    QTY_QUANTUM,
)


class InvalidDate(Enum):
    """Sentinel for a date that could not be parsed. Never ``None``; test with ``isinstance``."""

    INVALID = "invalid"

    def __str__(self) -> str:
        return INVALID_DATE_TEXT


INVALID_DATE: Final = InvalidDate.INVALID

DateValue: TypeAlias = Union[datetime, InvalidDate]


# region Quantities


def round_qty(value: Union[Decimal, int, float, str]) -> Decimal:
    """Quantize a quantity to the configured number of decimal places (half-up)."""
    if isinstance(value, float):
        # Avoid binary float artifacts
        value = Decimal(str(value))
    return Decimal(value).quantize(QTY_QUANTUM, rounding=ROUND_HALF_UP, context=QTY_CONTEXT)


def qty_context() -> ContextManager[Context]:
    """Decimal context for quantity arithmetic; wide enough that sums and differences stay exact."""
    return localcontext(QTY_CONTEXT)


def to_quantity(value: object) -> Optional[Decimal]:
    """
    Parse a nominal quantity into a positive Decimal magnitude, unrounded.

    Numeric inputs are used directly. Anything else is stringified, stripped
    of every character except digits, '.' and '-', and its leading numeric
    prefix is parsed (so "1,250.50 EUR" -> 1250.50 and "12-3" -> 12).

    Returns ``None`` when nothing parses, the magnitude is not positive, or
    it is too large to carry 8 decimal places at ``QTY_PRECISION`` digits.

    Examples:
        to_quantity("-3,188.32")   -> Decimal('3188.32')
        to_quantity(" 100 ")       -> Decimal('100')
        to_quantity("n/a")         -> None
        to_quantity(0)             -> None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        number = Decimal(str(value))
    else:
        cleaned = _NON_QTY_CHARS.sub("", str(value))
        m = _LEADING_NUMBER.match(cleaned)
        if not m:
            return None
        try:
            number = Decimal(m.group(0))
        except InvalidOperation:
            return None

    if not number.is_finite():
        return None
    if number.adjusted() + QTY_DECIMALS >= QTY_PRECISION:
        return None
    qty = number.copy_abs()
    return qty if qty > 0 else None


def format_qty(value: Decimal) -> str:
    """Render a quantity as a plain decimal string: no exponent, no trailing zeros."""
    return format(value.normalize(), "f")


# endregion Quantities

# region Dates


def excel_serial_to_datetime(serial: float) -> datetime:
    """Convert an Excel 1900-system serial day count (fraction = time of day)."""
    return EXCEL_EPOCH + timedelta(days=serial)


def is_excel_serial(number: float) -> bool:
    return EXCEL_SERIAL_MIN < number < EXCEL_SERIAL_MAX


def to_datetime(value: object, /) -> DateValue:
    """
    Convert a cell payload into a naive ``datetime``, or ``INVALID_DATE``.

    Accepts, in order:
      • datetime / pandas.Timestamp → returned (timezone-aware values are
        converted to UTC and made naive)
      • date                        → combined with midnight
      • number or numeric text strictly between 10000 and 100000
                                    → Excel serial day count
      • free text                   → ISO 8601, a set of common layouts
                                      ("24 May 2021", "05/24/2021", ...),
                                      then pandas' own parser

    Never raises for bad input; unparseable values yield ``INVALID_DATE``.
    """
    if value is None or isinstance(value, bool):
        return INVALID_DATE

    if isinstance(value, datetime):
        if pd.isna(value):
            return INVALID_DATE
        if isinstance(value, pd.Timestamp):
            value = value.to_pydatetime()
        return _naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time())

    if isinstance(value, (int, float, Decimal)):
        if isinstance(value, float) and not math.isfinite(value):
            return INVALID_DATE
        if is_excel_serial(float(value)):
            return excel_serial_to_datetime(float(value))

    txt = str(value).strip()
    if not txt:
        return INVALID_DATE

    number = to_number(txt)
    if number is not None and is_excel_serial(float(number)):
        return excel_serial_to_datetime(float(number))

    return _parse_date_text(txt)


def _naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _parse_date_text(txt: str) -> DateValue:
    try:
        return _naive(datetime.fromisoformat(re.sub(r"Z$", "+00:00", txt)))
    except ValueError:
        pass

    for fmt in _DATE_PATTERNS:
        try:
            return datetime.strptime(txt, fmt)
        except ValueError:
            continue

    # pandas fills a missing year from today (time-only text) or year 1
    if not _YEAR.search(txt):
        return INVALID_DATE

    # Last resort: let pandas guess. It warns when it has to infer a layout.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(txt, errors="coerce")
        except (TypeError, ValueError, OverflowError):
            return INVALID_DATE
    if parsed is None or pd.isna(parsed):
        return INVALID_DATE
    return _naive(parsed.to_pydatetime())


def format_date(value: DateValue) -> str:
    """Render a date as YYYY-MM-DD, or the invalid-date marker."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    return INVALID_DATE_TEXT


def date_sort_key(value: DateValue) -> Tuple[int, datetime]:
    """Sort key placing every invalid date after every valid one."""
    if isinstance(value, datetime):
        return (0, value)
    return (1, datetime.min)


# endregion Dates

# region Contract codes


def to_number(text: str) -> Optional[Decimal]:
    """Return the finite number ``text`` spells out in full, else ``None``."""
    s = text.strip()
    if not _FULL_NUMBER.fullmatch(s):
        return None
    try:
        number = Decimal(s)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def natural_key(text: str) -> tuple:
    """
    Case- and accent-insensitive key comparing digit runs by value.

    "a2" < "A10" < "b1"
    """
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    parts = _DIGIT_RUN.split(folded.casefold())
    # re.split with a capture group alternates text, digits, text, ...
    return tuple(int(p) if i % 2 else p for i, p in enumerate(parts))


def compare_contract(a: object, b: object) -> int:
    """
    Three-way comparison of contract codes for same-date ordering.

    1. identical (after trimming) → 0
    2. both fully numeric         → numeric order ("2" < "10")
    3. an empty code sorts after any non-empty code
    4. otherwise                  → natural, case/accent-insensitive order

    Non-digit runs compare by code point after case and accent folding, so
    punctuation does not follow locale collation: here "a1" < "a-1" < "a_1"
    and "a1" < "a_", where ICU would rank the punctuation before the digit.
    """
    a_str = "" if a is None else str(a).strip()
    b_str = "" if b is None else str(b).strip()
    if a_str == b_str:
        return 0

    a_num = to_number(a_str) if a_str else None
    b_num = to_number(b_str) if b_str else None
    if a_num is not None and b_num is not None:
        return _sign(a_num - b_num)

    if not a_str:
        return 1
    if not b_str:
        return -1

    a_key, b_key = natural_key(a_str), natural_key(b_str)
    if a_key == b_key:
        return 0
    return -1 if a_key < b_key else 1


def _sign(d: Decimal) -> int:
    if d > 0:
        return 1
    if d < 0:
        return -1
    return 0


# endregion Contract codes

_NON_QTY_CHARS: Final[re.Pattern[str]] = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER: Final[re.Pattern[str]] = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_FULL_NUMBER: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
)
_DIGIT_RUN: Final[re.Pattern[str]] = re.compile(r"(\d+)")
_YEAR: Final[re.Pattern[str]] = re.compile(r"\d{4}")
_DATE_PATTERNS: Final[Tuple[str, ...]] = (
    "%d %b %Y",  # 24 May 2021
    "%d %B %Y",  # 24 September 2021
    "%d-%b-%Y",  # 24-May-2021
    "%d-%b-%y",  # 24-May-21
    "%b %d %Y",  # May 24 2021
    "%b %d, %Y",  # May 24, 2021
    "%B %d, %Y",  # September 24, 2021
    "%m/%d/%Y",  # 05/24/2021
    "%m/%d/%y",  # 05/24/21
    "%Y/%m/%d",  # 2021/05/24
    "%Y.%m.%d",  # 2021.05.24
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
)
