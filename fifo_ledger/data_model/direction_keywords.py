# fifo_ledger/data_model/direction_keywords.py
from __future__ import annotations

from dataclasses import dataclass

from fifo_ledger.exceptions import ColumnMappingError
from fifo_ledger.utilities.config_matching import (
    DEFAULT_BUY_KEYWORD,
    DEFAULT_SELL_KEYWORD,
)


@dataclass(frozen=True)
class DirectionKeywords:
    """
    Substring markers that classify a direction cell as a buy or a sell.
    Stored trimmed and lower-cased; matching is case-insensitive.
    """

    buy: str = DEFAULT_BUY_KEYWORD
    sell: str = DEFAULT_SELL_KEYWORD

    def __post_init__(self) -> None:
        buy = (self.buy or "").strip().lower()
        sell = (self.sell or "").strip().lower()
        empty = [name for name, kw in (("buy", buy), ("sell", sell)) if not kw]
        if empty:
            raise ColumnMappingError("Direction keywords must not be empty", empty)
        object.__setattr__(self, "buy", buy)
        object.__setattr__(self, "sell", sell)

    @property
    def overlapping(self) -> bool:
        """True when one marker contains the other, so some rows can match both."""
        return self.buy in self.sell or self.sell in self.buy
