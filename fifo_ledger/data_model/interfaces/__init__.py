"""
Interfaces and Enums for the lot data model.
"""

from .enum_cell_kind import EnumCellKind
from .enum_direction import EnumDirection
from .enum_lot_status import EnumLotStatus
from .i_to_dict import IToDict, RecursiveDictStr

__all__ = [
    "EnumCellKind",
    "EnumDirection",
    "EnumLotStatus",
    "IToDict",
    "RecursiveDictStr",
]
