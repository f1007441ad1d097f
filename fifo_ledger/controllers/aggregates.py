# fifo_ledger/controllers/aggregates.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from fifo_ledger.data_model import EnumDirection, EnumLotStatus, Lot, RecursiveDictStr
from fifo_ledger.utilities import format_qty, qty_context, round_qty


@dataclass(frozen=True)
class LotSummary:
    """Headline figures over a finished lot set."""

    total_lots: int
    open_lots: int
    closed_lots: int
    open_long_qty: Decimal  # remaining on open BUY lots
    open_short_qty: Decimal  # remaining on open SELL lots
    net_open_qty: Decimal  # long - short
    total_bought_qty: Decimal  # open_qty of every BUY lot, closed or not
    total_sold_qty: Decimal  # open_qty of every SELL lot, closed or not

    def to_dict(self) -> dict[str, RecursiveDictStr]:
        return {
            "total_lots": self.total_lots,
            "open_lots": self.open_lots,
            "closed_lots": self.closed_lots,
            "open_long_qty": format_qty(self.open_long_qty),
            "open_short_qty": format_qty(self.open_short_qty),
            "net_open_qty": format_qty(self.net_open_qty),
            "total_bought_qty": format_qty(self.total_bought_qty),
            "total_sold_qty": format_qty(self.total_sold_qty),
        }


def summarize_lots(lots: Sequence[Lot]) -> LotSummary:
    with qty_context():
        return _summarize(lots)


def _summarize(lots: Sequence[Lot]) -> LotSummary:
    open_lots = [lot for lot in lots if lot.is_open]
    open_long = sum(
        (lot.remaining_qty for lot in open_lots if lot.side is EnumDirection.BUY),
        Decimal("0"),
    )
    open_short = sum(
        (lot.remaining_qty for lot in open_lots if lot.side is EnumDirection.SELL),
        Decimal("0"),
    )
    return LotSummary(
        total_lots=len(lots),
        open_lots=len(open_lots),
        closed_lots=len(lots) - len(open_lots),
        open_long_qty=open_long,
        open_short_qty=open_short,
        net_open_qty=round_qty(open_long - open_short),
        total_bought_qty=sum(
            (lot.open_qty for lot in lots if lot.side is EnumDirection.BUY), Decimal("0")
        ),
        total_sold_qty=sum(
            (lot.open_qty for lot in lots if lot.side is EnumDirection.SELL), Decimal("0")
        ),
    )


def running_remaining(lot: Lot) -> List[Decimal]:
    """
    The lot's remaining quantity right after each contributor, in ledger order.

    Rebuilt from the contributors alone: own-side adds, opposite-side
    subtracts, and every step after the opening one is rounded, as in the
    matcher. Shows history rather than just the final `remaining_qty`; the
    last value equals `remaining_qty`.
    """
    out: List[Decimal] = []
    balance = Decimal("0")
    with qty_context():
        for i, c in enumerate(lot.contributors):
            balance = balance + c.signed_qty(lot.side)
            if i:
                balance = round_qty(balance)
            out.append(balance)
    return out


def filter_lots(
    lots: Iterable[Lot], status: Optional[EnumLotStatus] = None
) -> List[Lot]:
    """Lots with the given status, in their original order; all lots when ``status`` is None."""
    if status is None:
        return list(lots)
    return [lot for lot in lots if lot.status is status]
