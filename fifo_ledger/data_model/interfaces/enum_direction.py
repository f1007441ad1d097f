from enum import Enum


class EnumDirection(Enum):
    """
    Direction of a transaction, and the side of the lot it opens.

    A BUY lot is a long position, a SELL lot a short one.
    """
    BUY = "buy"
    SELL = "sell"

    @property
    def opposite(self) -> "EnumDirection":
        return EnumDirection.SELL if self is EnumDirection.BUY else EnumDirection.BUY

    @property
    def position_label(self) -> str:
        return "LONG" if self is EnumDirection.BUY else "SHORT"

    def __str__(self) -> str:
        return self.value
