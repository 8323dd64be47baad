from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.module import ModuleGroup, ModuleRecord
from ..models.row_record import RowRecord
from ..models.schema import DEFAULT_SCHEMA, RowSchema
from .classifier import is_group_header, is_module_row
from .parsing import parse_decimal, parse_integer, parse_or_default

"""Grouping of classified grade table rows into module groups.

Single left-to-right scan: each group header row opens a group that collects
the module rows up to the next header row. Module rows before the first header
belong to no group and are dropped.
"""

__all__ = [
    "build_groups",
    "parse_module_row",
    "parse_group_header_row",
]

logger = logging.getLogger(__name__)


def parse_module_row(row: RowRecord, schema: RowSchema = DEFAULT_SCHEMA) -> ModuleRecord:
    """Create a ModuleRecord from a module row.

    Unparsable grade, points or credits default to 0 individually.
    """
    return ModuleRecord(
        id=parse_integer(schema.text(row, "identifier")),
        name=schema.text(row, "name"),
        grade=parse_or_default(parse_decimal, schema.text(row, "grade"), 0.0),
        points=parse_or_default(parse_decimal, schema.text(row, "points"), 0.0),
        credits=parse_or_default(parse_decimal, schema.text(row, "credits"), 0.0),
    )


def parse_group_header_row(
    row: RowRecord,
    schema: RowSchema = DEFAULT_SCHEMA,
    modules: Sequence[ModuleRecord] = (),
) -> ModuleGroup:
    """Create a ModuleGroup from a group header row (must satisfy is_group_header)."""
    group_id = parse_integer(schema.text(row, "identifier"))
    if group_id is None:
        raise ValueError(f"row {row.row_number} is not a group header row")
    return ModuleGroup(
        id=group_id,
        name=schema.text(row, "name"),
        acquired_credits=parse_or_default(parse_decimal, schema.text(row, "credits"), 0.0),
        modules=tuple(modules),
    )


def build_groups(rows: Sequence[RowRecord], schema: RowSchema = DEFAULT_SCHEMA) -> list[ModuleGroup]:
    """Partition rows into module groups in header order.

    Args:
        rows: Grade table rows in source order
        schema: Column layout and header ids

    Returns:
        One ModuleGroup per header row, each holding its module rows in source order
    """
    groups: list[ModuleGroup] = []
    header: RowRecord | None = None
    modules: list[ModuleRecord] = []
    orphans = 0

    for row in rows:
        if is_group_header(row, schema):
            if header is not None:
                groups.append(parse_group_header_row(header, schema, modules))
            header = row
            modules = []
        elif is_module_row(row, schema):
            if header is None:
                orphans += 1
                continue
            modules.append(parse_module_row(row, schema))

    if header is not None:
        groups.append(parse_group_header_row(header, schema, modules))

    if orphans:
        logger.debug(f"dropped {orphans} module row(s) before the first group header")
    logger.debug(
        f"built {len(groups)} group(s) with {sum(len(g.modules) for g in groups)} module(s) from {len(rows)} row(s)"
    )
    return groups
