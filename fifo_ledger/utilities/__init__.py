from .config_logging import LOG_DIR, LOGGING, logging_config
from .converters_scalar import (
    INVALID_DATE,
    DateValue,
    InvalidDate,
    compare_contract,
    date_sort_key,
    format_date,
    format_qty,
    qty_context,
    round_qty,
    to_datetime,
    to_quantity,
)
from .core_util import is_null_or_whitespace, open_for_write

__all__ = [
    "INVALID_DATE",
    "DateValue",
    "InvalidDate",
    "compare_contract",
    "date_sort_key",
    "format_date",
    "format_qty",
    "qty_context",
    "round_qty",
    "to_datetime",
    "to_quantity",
    "is_null_or_whitespace",
    "open_for_write",
    "LOG_DIR",
    "LOGGING",
    "logging_config",
]
