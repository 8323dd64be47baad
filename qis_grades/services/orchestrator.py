from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import GradesConfig
from ..models.processing_result import FileStat, ProcessingResult
from ..models.summary import TranscriptResult
from ..source.reader import SUPPORTED_SUFFIXES, SourceReadError, read_rows, scan_transcript_files
from .aggregator import compute
from .progress import ProgressTracker

"""Service orchestration for a qis-grades run.

Resolves the source files of a run, computes one TranscriptResult per file
(read rows -> build groups -> aggregate), collects file-level failures in the
error log and returns a ProcessingResult. A file that cannot be read fails on
its own; the remaining files are still processed.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal run error: nothing could be processed."""


def collect_source_files(paths: Sequence[Path]) -> list[Path]:
    """Expand directories into their supported files; files are kept as given.

    Raises:
        ProcessingError: If a path does not exist
    """
    files: list[Path] = []
    for path in paths:
        if not path.exists():
            raise ProcessingError(f"path not found: {path}")
        if path.is_dir():
            try:
                files.extend(scan_transcript_files(path))
            except OSError as e:
                raise ProcessingError(f"error reading directory {path}: {e}") from e
        else:
            files.append(path)
    return files


def process_file(path: Path, config: GradesConfig) -> TranscriptResult:
    """Compute the grade summary of one source file.

    Raises:
        SourceReadError: If the file cannot be read
    """
    rows = read_rows(path, config.source)
    logger.debug(f"{path.name}: read {len(rows)} row(s)")
    return compute(rows, config.schema, required_credits=config.required_credits, source=path.name)


def process_all(
    config: GradesConfig,
    paths: Sequence[Path] | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Process all source files of a run.

    Args:
        config: Run configuration
        paths: Files and/or directories; the configured source_directory when None
        error_log: Buffer for file-level errors (a fresh one when None)

    Returns:
        ProcessingResult with per-file results and stats

    Raises:
        ProcessingError: If a given path or the source directory does not exist
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    if paths is None:
        directory = Path(config.source_directory)
        if not directory.is_dir():
            raise ProcessingError(f"directory not found: {directory}")
        paths = [directory]
    file_paths = collect_source_files(paths)
    if not file_paths:
        logger.info(f"no source files found (supported: {', '.join(SUPPORTED_SUFFIXES)})")

    results: list[TranscriptResult] = []
    file_stats: list[FileStat] = []
    failed_count = 0
    total_modules = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            file_start = datetime.now(UTC)
            try:
                result = process_file(file_path, config)
            except SourceReadError as e:
                failed_count += 1
                logger.error(f"{file_path.name}: {e}")
                error_log.append(ErrorRecord.create(file_path.name, -1, "SOURCE_READ_ERROR", str(e)))
                stat = FileStat(
                    file_name=file_path.name,
                    status="failed",
                    groups=0,
                    modules=0,
                    elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
                    error=str(e),
                )
            else:
                results.append(result)
                total_modules += result.module_count
                stat = FileStat(
                    file_name=file_path.name,
                    status="success",
                    groups=len(result.groups),
                    modules=result.module_count,
                    elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
                )
            file_stats.append(stat)
            progress.finish_file(stat)

    try:
        log_path = error_log.flush()
    except OSError as e:
        # Results are complete; a failed error log write does not fail the run
        logger.warning(f"error log could not be written: {e}")
    else:
        if log_path is not None:
            logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=len(results),
        failed_files=failed_count,
        total_modules=total_modules,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        results=results,
        file_stats=file_stats,
    )
