from enum import Enum


class EnumLotStatus(Enum):
    """
    Lifecycle of a lot. Transitions only OPEN -> CLOSED.
    """
    OPEN = "open"
    CLOSED = "closed"

    @classmethod
    def from_text(cls, text: str) -> "EnumLotStatus":
        """
        Convert a case-insensitive status name to an EnumLotStatus.
        """
        for status in cls:
            if status.value == text.strip().lower():
                return status
        raise ValueError(f"Unknown lot status: {text}")

    def __str__(self) -> str:
        return self.value
