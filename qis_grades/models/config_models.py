from __future__ import annotations

from dataclasses import dataclass, field

from .schema import DEFAULT_SCHEMA, RowSchema

"""Config dataclasses for the qis-grades tool.

These are the typed form of config/grades.yml; loading and validation live in
qis_grades.config.loader.
"""

QIS_TABLE_SELECTOR = "#wrapper > div.divcontent > div.content > form > table:nth-child(5)"


@dataclass(frozen=True)
class SourceConfig:
    """How rows are read from a saved grade table."""
    table_selector: str = QIS_TABLE_SELECTOR  # CSS selector, HTML sources only
    header_rows: int = 1  # leading rows skipped (table caption row)
    sheet: int | str = 0  # worksheet, .xlsx sources only


@dataclass(frozen=True)
class GradesConfig:
    """Root configuration object for a qis-grades run."""
    source_directory: str = "./data"  # scanned when no paths are given
    source: SourceConfig = field(default_factory=SourceConfig)
    schema: RowSchema = DEFAULT_SCHEMA
    required_credits: float | None = None  # credits required by the examination regulations
