from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .summary import TranscriptResult

"""Processing result models for a qis-grades run.

A run computes one TranscriptResult per source file; these models aggregate the
per-file outcomes for the SUMMARY line and the CLI exit code.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: str  # success/failed
    groups: int  # module groups found
    modules: int  # module rows found
    elapsed_seconds: float
    error: str | None = None  # failure reason for failed files


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of processing all source files of one run."""
    success_files: int
    failed_files: int
    total_modules: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    results: list[TranscriptResult] = field(default_factory=list)  # successful files, in order
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
