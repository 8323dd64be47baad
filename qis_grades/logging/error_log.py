from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

"""Error log buffering for source files that could not be processed.

- JSON Lines, fixed keys (timestamp, file, row, error_type, message)
- One `logs/errors-YYYYMMDD-HHMMSS.log` (UTC) per run, created on the first
  flush that has records to write
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source file name
        row: Row number (1-based). -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE
        message: Error description
    """
    timestamp: str
    file: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(timestamp=ts, file=file, row=row, error_type=error_type, message=message)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush appends JSON Lines to the run's log file."""

    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self._records: list[ErrorRecord] = []
        self._logs_dir = logs_dir
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None if nothing was written."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
