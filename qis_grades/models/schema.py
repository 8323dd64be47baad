from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .row_record import RowRecord

"""RowSchema model for the QIS grade table.

Declares the positional layout of a grade table row once: which column holds
which field, how many cells a module row has, and which identifiers mark a
module group header.
"""

__all__ = [
    "RowSchema",
    "DEFAULT_SCHEMA",
    "DEFAULT_GROUP_HEADER_IDS",
]

# 100: compulsory modules, 300: focus modules, 400: elective modules,
# 80000: interdisciplinary weeks
DEFAULT_GROUP_HEADER_IDS: frozenset[int] = frozenset({100, 300, 400, 80000})


@dataclass(frozen=True)
class RowSchema:
    """Named-field accessor over positional row data.

    Column positions are 0-based cell indexes within a row.
    """
    identifier: int = 0
    name: int = 1
    grade: int = 6
    points: int = 7
    credits: int = 9
    module_cell_count: int = 12  # exact cell count of a module row
    group_header_ids: frozenset[int] = field(default=DEFAULT_GROUP_HEADER_IDS)

    FIELDS = ("identifier", "name", "grade", "points", "credits")

    def position(self, field_name: str) -> int:
        if field_name not in self.FIELDS:
            raise KeyError(f"unknown row field: {field_name}")
        return getattr(self, field_name)

    def text(self, row: RowRecord, field_name: str) -> str:
        """Trimmed text of the named field; '' when the row is too short."""
        return row.cell(self.position(field_name)).strip()


DEFAULT_SCHEMA = RowSchema()
