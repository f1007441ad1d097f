# fifo_ledger/data_model/column_mapping.py
"""
Which sheet column plays which role.

The engine reads six roles from every row: the value date, the buy/sell
direction, the nominal quantity and three reference codes (transaction,
contract, package). `auto_map_columns` proposes positions from header names;
`ColumnMapping.from_roles` is the only way to get a mapping the engine will
accept, and rejects anything incomplete or ambiguous.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict, Final, Mapping, Optional, Sequence, Tuple, Union

from fifo_ledger.exceptions import ColumnMappingError

from .excel import Cell

REQUIRED_ROLES: Final[Tuple[str, ...]] = (
    "date",
    "direction",
    "nominal",
    "trn",
    "cnc",
    "pck",
)

ROLE_LABELS: Final[Dict[str, str]] = {
    "date": "Value Date",
    "direction": "Direction (B/S)",
    "nominal": "Nominal",
    "trn": "TRN",
    "cnc": "CNC",
    "pck": "PCK",
}


@dataclass(frozen=True)
class ColumnMapping:
    """0-based column position for each required role. All positions are distinct."""

    date: int
    direction: int
    nominal: int
    trn: int
    cnc: int
    pck: int

    @classmethod
    def from_roles(
        cls,
        roles: Mapping[str, Optional[int]],
        column_count: Optional[int] = None,
    ) -> ColumnMapping:
        """
        Validate a role → column assignment and freeze it.

        Raises
        ------
        ColumnMappingError
            If a role is unknown or missing, a position is negative or beyond
            ``column_count``, or two roles share a column.
        """
        unknown = [r for r in roles if r not in REQUIRED_ROLES]
        if unknown:
            raise ColumnMappingError("Unknown column roles", unknown)

        missing = [r for r in REQUIRED_ROLES if roles.get(r) is None]
        if missing:
            raise ColumnMappingError("No column selected for", missing)

        positions = {r: int(roles[r]) for r in REQUIRED_ROLES}  # type: ignore[arg-type]
        out_of_range = [
            r
            for r, p in positions.items()
            if p < 0 or (column_count is not None and p >= column_count)
        ]
        if out_of_range:
            raise ColumnMappingError("Column position out of range for", out_of_range)

        by_position: Dict[int, list] = {}
        for r, p in positions.items():
            by_position.setdefault(p, []).append(r)
        shared = [r for rs in by_position.values() if len(rs) > 1 for r in rs]
        if shared:
            raise ColumnMappingError("Roles share a column", shared)

        return cls(**positions)

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)

    def cell(self, row: Sequence[Cell], role: str) -> Cell:
        """The row's cell for ``role``; short rows read as missing."""
        pos = getattr(self, role)
        if pos >= len(row):
            return Cell.missing()
        return Cell.of(row[pos])


# Ordered from most specific to generic; first match wins per role
_PATTERN_SETS: Final[Dict[str, Tuple[re.Pattern[str], ...]]] = {
    "date": (
        re.compile(r"\bvalue.?date\b", re.IGNORECASE),
        re.compile(r"^date$", re.IGNORECASE),
        re.compile(r"\bopt_flwfst\b", re.IGNORECASE),
        re.compile(r"date|time|dt", re.IGNORECASE),
    ),
    "direction": (
        re.compile(r"\bb/?s\b", re.IGNORECASE),
        re.compile(r"direction|side|buy.*sell", re.IGNORECASE),
    ),
    "nominal": (
        re.compile(r"\bnominal\s*0\b", re.IGNORECASE),
        re.compile(r"\bqty\b|\bquantity\b", re.IGNORECASE),
        re.compile(r"\bnominal\b", re.IGNORECASE),
        re.compile(r"amount|notional|volume", re.IGNORECASE),
    ),
    "trn": (
        re.compile(r"\btrn[.\s]?nb\b", re.IGNORECASE),
        re.compile(r"\btrn\b", re.IGNORECASE),
        re.compile(r"transaction", re.IGNORECASE),
    ),
    "cnc": (
        re.compile(r"\bcnt[.\s]?nb\b", re.IGNORECASE),
        re.compile(r"\bcnc\b", re.IGNORECASE),
        re.compile(r"contract", re.IGNORECASE),
    ),
    "pck": (
        re.compile(r"\bpck[.\s]?nb\b", re.IGNORECASE),
        re.compile(r"\bpck\b", re.IGNORECASE),
        re.compile(r"package", re.IGNORECASE),
    ),
}


def auto_map_columns(headers: Sequence[str]) -> Dict[str, int]:
    """Propose a column for each role from header names.

    Parameters
    ----------
    headers : Sequence[str]
        Header row, already trimmed.

    Returns
    -------
    Dict[str, int]
        Role → 0-based position for every role some header matched. Roles
        with no match are absent; two roles may land on the same column,
        which `ColumnMapping.from_roles` will then reject.
    """
    proposal: Dict[str, int] = {}
    for role, patterns in _PATTERN_SETS.items():
        for pattern in patterns:
            idx = next((i for i, h in enumerate(headers) if pattern.search(h)), None)
            if idx is not None:
                proposal[role] = idx
                break
    return proposal


def resolve_column(headers: Sequence[str], ref: Union[str, int]) -> int:
    """Turn a header name (case-insensitive) or a 0-based position into a position."""
    if isinstance(ref, int):
        return ref
    wanted = ref.strip()
    for i, h in enumerate(headers):
        if h.strip().lower() == wanted.lower():
            return i
    if wanted.isdigit():
        return int(wanted)
    raise ColumnMappingError(f"No column named {wanted!r}")
