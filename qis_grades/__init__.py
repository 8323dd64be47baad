"""qis-grades: credit-weighted grade summary from a QIS grade table.

Rows of the grade table are classified into group header rows and module rows,
grouped into module groups, and aggregated into a Summary:

    >>> from qis_grades import RowRecord, build_groups, aggregate
    >>> rows = [
    ...     RowRecord.of(["100", "Pflichtmodule", "", "", "", "", "", "", "", "30,0"]),
    ...     RowRecord.of(["1001", "Analysis", "", "", "", "", "2,0", "", "", "10,0", "", ""]),
    ...     RowRecord.of(["1002", "Algebra", "", "", "", "", "3,0", "", "", "20,0", "", ""]),
    ... ]
    >>> summary = aggregate(build_groups(rows))
    >>> round(summary.average_grade, 3), summary.total_credits
    (2.667, 30.0)
"""

from .models import (
    DEFAULT_SCHEMA,
    ModuleGroup,
    ModuleRecord,
    RowRecord,
    RowSchema,
    Summary,
    TranscriptResult,
    WeightedModule,
)
from .services.aggregator import aggregate, compute, modules_frame, weigh_modules
from .services.classifier import is_group_header, is_module_row
from .services.group_builder import build_groups

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SCHEMA",
    "ModuleGroup",
    "ModuleRecord",
    "RowRecord",
    "RowSchema",
    "Summary",
    "TranscriptResult",
    "WeightedModule",
    "aggregate",
    "build_groups",
    "compute",
    "is_group_header",
    "is_module_row",
    "modules_frame",
    "weigh_modules",
]
