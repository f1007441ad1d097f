# fifo_ledger/data_model/lot.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, List

from fifo_ledger.exceptions import LotInvariantError
from fifo_ledger.utilities import DateValue, format_date, format_qty

from .interfaces import EnumDirection, EnumLotStatus, IToDict, RecursiveDictStr
from .transaction import Transaction


@dataclass(frozen=True)
class Contribution:
    """How much of one transaction was applied to one lot."""

    direction: EnumDirection
    qty: Decimal
    date: DateValue
    trn: str = ""
    cnc: str = ""
    pck: str = ""
    source_row: int = -1

    @classmethod
    def from_transaction(cls, txn: Transaction, qty: Decimal) -> Contribution:
        return cls(
            direction=txn.direction,
            qty=qty,
            date=txn.date,
            trn=txn.trn,
            cnc=txn.cnc,
            pck=txn.pck,
            source_row=txn.source_row,
        )

    def signed_qty(self, side: EnumDirection) -> Decimal:
        """Positive when this contribution adds to a lot on ``side``, negative when it closes it."""
        return self.qty if self.direction is side else -self.qty

    def to_dict(self) -> dict[str, RecursiveDictStr]:
        """Convert to a simple dict for easier serialization/debugging."""
        return {
            "direction": str(self.direction),
            "qty": format_qty(self.qty),
            "date": format_date(self.date),
            "trn": self.trn,
            "cnc": self.cnc,
            "pck": self.pck,
            "source_row": self.source_row,
        }


@dataclass
class Lot:
    """
    A block of long (BUY) or short (SELL) exposure opened by one transaction.

    `open_qty` is fixed at creation. `remaining_qty` shrinks as opposite-side
    transactions are matched against the lot; once it reaches zero the lot is
    closed for good. `contributors` is the append-only audit trail, starting
    with the opening transaction.
    """

    id: int
    side: EnumDirection
    open_qty: Decimal
    remaining_qty: Decimal
    date: DateValue
    trn: str = ""
    cnc: str = ""
    pck: str = ""
    status: EnumLotStatus = EnumLotStatus.OPEN
    contributors: List[Contribution] = field(default_factory=list)

    @classmethod
    def open_from(cls, lot_id: int, txn: Transaction, qty: Decimal) -> Lot:
        """Open a lot on the transaction's side for the unmatched ``qty``."""
        return cls(
            id=lot_id,
            side=txn.direction,
            open_qty=qty,
            remaining_qty=qty,
            date=txn.date,
            trn=txn.trn,
            cnc=txn.cnc,
            pck=txn.pck,
            contributors=[Contribution.from_transaction(txn, qty)],
        )

    @property
    def is_open(self) -> bool:
        return self.status is EnumLotStatus.OPEN

    def close(self) -> None:
        if not self.is_open:
            raise LotInvariantError(self.id, "closed twice")
        if self.remaining_qty != 0:
            raise LotInvariantError(
                self.id, f"closed with {format_qty(self.remaining_qty)} remaining"
            )
        self.status = EnumLotStatus.CLOSED

    def to_dict(self) -> dict[str, RecursiveDictStr]:
        """Convert to a simple dict for easier serialization/debugging."""
        return {
            "id": self.id,
            "side": str(self.side),
            "status": str(self.status),
            "open_qty": format_qty(self.open_qty),
            "remaining_qty": format_qty(self.remaining_qty),
            "date": format_date(self.date),
            "trn": self.trn,
            "cnc": self.cnc,
            "pck": self.pck,
            "contributors": [c.to_dict() for c in self.contributors],
        }


if TYPE_CHECKING:
    _is_idict_lot: type[IToDict] = Lot
    _is_idict_contribution: type[IToDict] = Contribution
