from __future__ import annotations

from dataclasses import dataclass

"""Module and module group models for the grade table.

ModuleRecord and ModuleGroup are built by the group builder from classified
rows. WeightedModule is the per-run aggregated view produced by the aggregator;
records themselves are never modified after construction.
"""

__all__ = [
    "ModuleRecord",
    "ModuleGroup",
    "WeightedModule",
]


@dataclass(frozen=True)
class ModuleRecord:
    """One completed module (a module row of the grade table)."""
    id: int | None  # None when the identifier cell has no leading integer
    name: str
    grade: float = 0.0  # 0 when absent or unparsable
    points: float = 0.0
    credits: float = 0.0


@dataclass(frozen=True)
class ModuleGroup:
    """A module category (compulsory, focus, elective, interdisciplinary).

    Owns the module rows that follow its header row up to the next header row.
    """
    id: int
    name: str
    acquired_credits: float = 0.0
    modules: tuple[ModuleRecord, ...] = ()


@dataclass(frozen=True)
class WeightedModule:
    """ModuleRecord fields plus the credit weight computed during aggregation.

    weight = credits / total acquired credits; non-finite when the total is 0.
    """
    id: int | None
    name: str
    grade: float
    points: float
    credits: float
    weight: float
    weighted_grade: float
    weighted_points: float

    @classmethod
    def from_module(cls, module: ModuleRecord, weight: float) -> WeightedModule:
        return cls(
            id=module.id,
            name=module.name,
            grade=module.grade,
            points=module.points,
            credits=module.credits,
            weight=weight,
            weighted_grade=module.grade * weight,
            weighted_points=module.points * weight,
        )
