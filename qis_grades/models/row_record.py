from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

"""RowRecord model for the grade table.

A RowRecord is one table row as read from the source: the ordered cell texts,
untouched apart from conversion to str. Trimming and numeric parsing happen
later, at the point where a field is read.
"""

__all__ = [
    "RowRecord",
]


@dataclass(frozen=True)
class RowRecord:
    """Logical representation of a single grade table row.

    row_number is the 1-based position of the row in its source table
    (-1 when unknown).
    """
    cells: tuple[str, ...]
    row_number: int = -1

    @classmethod
    def of(cls, cells: Iterable[object], row_number: int = -1) -> RowRecord:
        return cls(cells=tuple("" if c is None else str(c) for c in cells), row_number=row_number)

    def __len__(self) -> int:
        return len(self.cells)

    def cell(self, index: int) -> str:
        """Cell text at index, or '' if the row has no such cell."""
        if 0 <= index < len(self.cells):
            return self.cells[index]
        return ""
