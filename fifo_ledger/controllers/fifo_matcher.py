# fifo_ledger/controllers/fifo_matcher.py
"""
FIFO lot matching: ordered transactions in, lots with contributor ledgers out.

Key points:
• Two queues of lot indices, one per side, hold the open lots oldest-first.
• A transaction first closes the opposite side's oldest open lots, one
  partial or full fill at a time; whatever is left opens a new lot on its
  own side.
• Both the lot's remaining quantity and the transaction's unallocated
  remainder are rounded to 8 places after every decrement. Parsed
  quantities enter unrounded, so an untouched lot keeps its exact size.
• Pure: all state is local to one `match_lots` call.

Public surface (stable):
    def match_lots(transactions) -> list[Lot]
    def verify_lot(lot) -> None
"""

from __future__ import annotations

import logging
from collections import deque
from decimal import Decimal
from typing import Deque, Dict, Iterable, List

from fifo_ledger.data_model import Contribution, EnumDirection, Lot, Transaction
from fifo_ledger.exceptions import LotInvariantError
from fifo_ledger.utilities import format_qty, qty_context, round_qty
from fifo_ledger.utilities.config_matching import QTY_QUANTUM

log = logging.getLogger(__name__)


# ---------- core class ----------


class _LotBook:
    """
    The growing lot collection plus one FIFO queue of open-lot indices per side.

    A lot's index sits only in its own side's queue, and leaves it exactly once,
    when the lot closes.
    """

    def __init__(self) -> None:
        self.lots: List[Lot] = []
        self._open: Dict[EnumDirection, Deque[int]] = {
            EnumDirection.BUY: deque(),
            EnumDirection.SELL: deque(),
        }

    def apply(self, txn: Transaction) -> None:
        """Allocate one transaction: close opposite-side lots first, then open a lot with the rest."""
        opposing = self._open[txn.direction.opposite]
        remaining: Decimal = txn.quantity

        while remaining > 0 and opposing:
            lot = self.lots[opposing[0]]
            if not lot.is_open:
                raise LotInvariantError(lot.id, "closed lot still queued")

            consume = min(remaining, lot.remaining_qty)
            if consume <= 0:
                raise LotInvariantError(lot.id, "open lot has nothing remaining")

            lot.remaining_qty = round_qty(lot.remaining_qty - consume)
            remaining = round_qty(remaining - consume)
            if lot.remaining_qty < 0 or remaining < 0:
                raise LotInvariantError(
                    lot.id, f"quantity went negative consuming {format_qty(consume)}"
                )

            lot.contributors.append(Contribution.from_transaction(txn, consume))

            if lot.remaining_qty == 0:
                lot.close()
                opposing.popleft()
                log.debug("Lot #%d closed by row %d", lot.id, txn.source_row)

        if remaining > 0:
            lot = Lot.open_from(len(self.lots) + 1, txn, remaining)
            self.lots.append(lot)
            self._open[txn.direction].append(len(self.lots) - 1)
            log.debug(
                "Lot #%d opened %s %s from row %d",
                lot.id,
                lot.side.position_label,
                format_qty(remaining),
                txn.source_row,
            )


# ---------- invariants ----------


def verify_lot(lot: Lot) -> None:
    """
    Check a lot's bookkeeping; raise `LotInvariantError` on the first breach.

    • 0 <= remaining_qty <= open_qty
    • status is CLOSED exactly when remaining_qty is zero
    • the first contributor is the opening transaction for open_qty
    • own-side contributions minus opposite-side ones equal remaining_qty,
      within half a quantum per rounded decrement
    """
    if not (0 <= lot.remaining_qty <= lot.open_qty):
        raise LotInvariantError(
            lot.id,
            f"remaining {format_qty(lot.remaining_qty)} outside 0..{format_qty(lot.open_qty)}",
        )
    if lot.is_open == (lot.remaining_qty == 0):
        raise LotInvariantError(
            lot.id, f"status {lot.status} disagrees with remaining {format_qty(lot.remaining_qty)}"
        )
    if not lot.contributors:
        raise LotInvariantError(lot.id, "no contributors")
    opening = lot.contributors[0]
    if opening.direction is not lot.side or opening.qty != lot.open_qty:
        raise LotInvariantError(lot.id, "first contributor is not the opening transaction")

    with qty_context():
        balance = sum((c.signed_qty(lot.side) for c in lot.contributors), Decimal("0"))
        drift = abs(balance - lot.remaining_qty)
    if drift > QTY_QUANTUM / 2 * (len(lot.contributors) - 1):
        raise LotInvariantError(
            lot.id,
            f"contributors net to {format_qty(balance)}, remaining is {format_qty(lot.remaining_qty)}",
        )


# ---------- entry point ----------


def match_lots(transactions: Iterable[Transaction]) -> List[Lot]:
    """Run FIFO matching over transactions already in FIFO order.

    Parameters
    ----------
    transactions : Iterable[Transaction]
        Output of `normalize_rows` (or any sequence in the same order).

    Returns
    -------
    List[Lot]
        Lots in creation order (ids 1, 2, ...), open and closed alike.

    Raises
    ------
    LotInvariantError
        If bookkeeping stops reconciling. The whole batch is abandoned.
    """
    book = _LotBook()
    count = 0
    with qty_context():
        for txn in transactions:
            book.apply(txn)
            count += 1

    for lot in book.lots:
        verify_lot(lot)

    log.debug(
        "Matched %d transactions into %d lots (%d open)",
        count,
        len(book.lots),
        sum(1 for lot in book.lots if lot.is_open),
    )
    return book.lots
