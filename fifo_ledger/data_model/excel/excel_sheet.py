from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from .excel_cell import Cell


@dataclass(frozen=True)
class ExcelSheet:
    """
    Header row plus data rows of one worksheet (or CSV file), every cell tagged.
    Rows that are blank in every column are not kept.
    """
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[Cell, ...], ...]  # immutable tuples for safety

    @classmethod
    def from_values(
        cls, headers: Sequence[object], rows: Iterable[Sequence[object]]
    ) -> ExcelSheet:
        """Build a sheet from raw reader output, padding short rows to the header width."""
        head = tuple(Cell.of(h).as_text() for h in headers)
        width = len(head)
        kept = []
        for raw in rows:
            cells = tuple(Cell.of(v) for v in raw)
            if all(c.is_missing for c in cells):
                continue
            if len(cells) < width:
                cells = cells + (Cell.missing(),) * (width - len(cells))
            kept.append(cells)
        return cls(headers=head, rows=tuple(kept))

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def __len__(self) -> int:
        return len(self.rows)
