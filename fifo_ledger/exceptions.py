# fifo_ledger/exceptions.py
"""
Exceptions raised by fifo_ledger.

Malformed transaction rows are never errors: the normalizer drops them.
These types cover the two remaining failure classes, callers handing the
engine something it was promised it would not get, and the engine breaking
its own bookkeeping.
"""

from typing import Iterable, Optional


class FifoLedgerError(Exception):
    """Base exception for all fifo_ledger errors."""
    pass


class ColumnMappingError(FifoLedgerError, ValueError):
    """Raised when a column mapping or direction keyword set is unusable."""

    def __init__(self, reason: str, roles: Optional[Iterable[str]] = None):
        self.reason = reason
        self.roles = tuple(roles or ())

        msg = reason
        if self.roles:
            msg += f": {', '.join(self.roles)}"
        super().__init__(msg)


class SheetLoadError(FifoLedgerError, ValueError):
    """Raised when an input file cannot be read into a sheet."""
    pass


class LotInvariantError(FifoLedgerError, RuntimeError):
    """Raised when lot bookkeeping stops reconciling. Always a bug, never bad input."""

    def __init__(self, lot_id: int, reason: str):
        self.lot_id = lot_id
        self.reason = reason
        super().__init__(f"Lot #{lot_id}: {reason}")
