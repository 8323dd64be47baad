from __future__ import annotations

from ..models.row_record import RowRecord
from ..models.schema import DEFAULT_SCHEMA, RowSchema
from .parsing import parse_integer

"""Row classification for the grade table.

A row is a group header row, a module row, or neither (spacers, subtotals,
exam attempts without a grade, malformed rows). Classification is total: rows
of any shape are classified without raising.
"""

__all__ = [
    "is_group_header",
    "is_module_row",
    "classify_row",
]

HEADER = "H"
MODULE = "M"
OTHER = "-"


def is_group_header(row: RowRecord, schema: RowSchema = DEFAULT_SCHEMA) -> bool:
    """True if the row's identifier is one of the group header ids."""
    if len(row.cells) < 1:
        return False
    identifier = parse_integer(schema.text(row, "identifier"))
    return identifier is not None and identifier in schema.group_header_ids


def is_module_row(row: RowRecord, schema: RowSchema = DEFAULT_SCHEMA) -> bool:
    """True if the row is a graded module row.

    A module row has exactly module_cell_count cells, is not a group header and
    has a non-empty grade cell.
    """
    if len(row.cells) != schema.module_cell_count:
        return False
    return not is_group_header(row, schema) and schema.text(row, "grade") != ""


def classify_row(row: RowRecord, schema: RowSchema = DEFAULT_SCHEMA) -> str:
    """One-letter classification used by inspection output: H, M or -."""
    if is_group_header(row, schema):
        return HEADER
    if is_module_row(row, schema):
        return MODULE
    return OTHER
