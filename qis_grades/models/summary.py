from __future__ import annotations

from dataclasses import dataclass

from .module import ModuleGroup, WeightedModule

"""Summary models for the grade aggregation.

Summary is the pure result of aggregating a group list. TranscriptResult bundles
one complete computation over one source for the presentation layer.
"""

__all__ = [
    "Summary",
    "TranscriptResult",
]


@dataclass(frozen=True)
class Summary:
    """Credit-weighted grade summary.

    average_grade is clamped to [1.0, 6.0] (NaN propagates), average_points is
    unclamped and NaN when there are no modules.
    """
    average_grade: float
    average_points: float
    total_credits: float


@dataclass(frozen=True)
class TranscriptResult:
    source: str  # file name or other label of the row source
    groups: tuple[ModuleGroup, ...]
    weighted_modules: tuple[WeightedModule, ...]
    summary: Summary
    # Accepted from the user and passed through for display only; the grade
    # math does not use it.
    required_credits: float | None = None

    @property
    def module_count(self) -> int:
        return sum(len(g.modules) for g in self.groups)
