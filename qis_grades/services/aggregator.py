from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
import pandas as pd

from ..models.module import ModuleGroup, WeightedModule
from ..models.row_record import RowRecord
from ..models.schema import DEFAULT_SCHEMA, RowSchema
from ..models.summary import Summary, TranscriptResult
from .group_builder import build_groups

"""Credit-weighted aggregation of module groups.

Each module is weighted by its credits over the total acquired credits of all
groups. The average grade is the clamped sum of weighted grades; the average
point score is the plain mean of the unweighted points. Weighted points are
computed for every module but do not enter the summary.

Division follows IEEE semantics throughout: a zero credit total yields
infinite or NaN weights and a module-less run yields NaN average points.
Nothing here raises on such input.
"""

__all__ = [
    "GRADE_MIN",
    "GRADE_MAX",
    "MODULE_COLUMNS",
    "modules_frame",
    "weigh_modules",
    "aggregate",
    "compute",
]

logger = logging.getLogger(__name__)

# Grading scale: 1 = best, 6 = fail
GRADE_MIN = 1.0
GRADE_MAX = 6.0

MODULE_COLUMNS = ["group_id", "group_name", "id", "name", "grade", "points", "credits"]
_NUMERIC_COLUMNS = {"grade": float, "points": float, "credits": float}


def modules_frame(groups: Sequence[ModuleGroup]) -> pd.DataFrame:
    """Flatten groups into one row per module, in group then module order."""
    records = [
        (group.id, group.name, module.id, module.name, module.grade, module.points, module.credits)
        for group in groups
        for module in group.modules
    ]
    return pd.DataFrame.from_records(records, columns=MODULE_COLUMNS).astype(_NUMERIC_COLUMNS)


def total_credits(groups: Sequence[ModuleGroup]) -> float:
    return float(sum(group.acquired_credits for group in groups))


def _weights(frame: pd.DataFrame, credits_total: float) -> pd.Series:
    # pandas division yields inf/NaN for a zero total instead of raising
    return frame["credits"] / credits_total


def weigh_modules(groups: Sequence[ModuleGroup]) -> list[WeightedModule]:
    """Weighted view of every module, in group then module order."""
    modules = [module for group in groups for module in group.modules]
    weights = _weights(modules_frame(groups), total_credits(groups))
    return [
        WeightedModule.from_module(module, float(weight))
        for module, weight in zip(modules, weights.tolist(), strict=True)
    ]


def aggregate(
    groups: Sequence[ModuleGroup],
    weighted: Sequence[WeightedModule] | None = None,
) -> Summary:
    """Aggregate module groups into a Summary.

    Args:
        groups: Module groups as returned by build_groups
        weighted: weigh_modules(groups), when the caller already has it

    Returns:
        Summary with the clamped weighted average grade, the unweighted average
        points and the total acquired credits
    """
    credits_total = total_credits(groups)
    if weighted is None:
        weighted = weigh_modules(groups)
    frame = pd.DataFrame.from_records(
        [(w.points, w.weighted_grade) for w in weighted],
        columns=["points", "weighted_grade"],
    ).astype(float)

    # skipna=False keeps a NaN weight visible instead of summing it away;
    # np.clip propagates NaN where min/max would not
    grade_sum = frame["weighted_grade"].sum(skipna=False)
    average_grade = float(np.clip(grade_sum, GRADE_MIN, GRADE_MAX))
    average_points = float(frame["points"].mean())

    if credits_total == 0 and len(frame):
        logger.debug(f"total acquired credits is 0 for {len(frame)} module(s); weights are not finite")
    return Summary(
        average_grade=average_grade,
        average_points=average_points,
        total_credits=credits_total,
    )


def compute(
    rows: Sequence[RowRecord],
    schema: RowSchema = DEFAULT_SCHEMA,
    required_credits: float | None = None,
    source: str = "",
) -> TranscriptResult:
    """Run grouping and aggregation on one row sequence.

    Every call builds its groups and records from scratch, so repeated calls on
    a changing source never carry state over.
    """
    groups = build_groups(rows, schema)
    weighted = weigh_modules(groups)
    if required_credits is not None:
        logger.debug(f"required credits {required_credits} noted for {source or 'rows'}; not used in the average")
    return TranscriptResult(
        source=source,
        groups=tuple(groups),
        weighted_modules=tuple(weighted),
        summary=aggregate(groups, weighted),
        required_credits=required_credits,
    )
