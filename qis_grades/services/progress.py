from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

from ..models.processing_result import FileStat

"""Progress display with tqdm (TTY only).

The bar counts source files; its postfix carries the running success/failed
file counts and the number of modules read so far. Disabled when stdout is not
a TTY, so piped output and CI logs carry only the RESULT and SUMMARY lines.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress bar over the transcripts of one run."""

    def __init__(self, total_files: int, *, description: str = "Processing transcripts") -> None:
        self.total_files = total_files
        self.description = description
        self.success = 0
        self.failed = 0
        self.modules = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None = None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=False,
                ncols=80,
                ascii=True,
            )

    def start_file(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, stat: FileStat) -> None:
        """Count a processed transcript and advance the bar."""
        if stat.status == "success":
            self.success += 1
            self.modules += stat.modules
        else:
            self.failed += 1
        if self.pbar is not None:
            self.pbar.set_postfix(success=self.success, failed=self.failed, modules=self.modules)
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
