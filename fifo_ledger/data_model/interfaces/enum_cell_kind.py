from enum import Enum


class EnumCellKind(Enum):
    """
    What a raw sheet cell holds.
    """
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    MISSING = "missing"
