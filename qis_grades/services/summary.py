from __future__ import annotations

import math
from dataclasses import asdict
from typing import Any

from ..models.processing_result import ProcessingResult
from ..models.summary import Summary, TranscriptResult

"""Result and SUMMARY line rendering.

render_result_cells reproduces the cells of the results row appended below the
grade table (average grade, average points, total credits, two decimals each).
The RESULT and SUMMARY lines are the CLI's machine-readable output:

RESULT source=<name> groups=<n> modules=<m> average_grade=<g> average_points=<p> total_credits=<c> [required_credits=<r>]
SUMMARY files=<n>/<n> success=<s> failed=<f> modules=<m> elapsed_sec=<e>
"""

AVERAGE_MARK = "∅"


def format_decimal(value: float, places: int = 2) -> str:
    """Fixed decimals; non-finite values render as nan / inf / -inf."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.{places}f}"


def render_result_cells(summary: Summary) -> list[str]:
    """Cells of the results row: ['∅ 2.67', '∅ 12.00', '30.00']."""
    return [
        f"{AVERAGE_MARK} {format_decimal(summary.average_grade)}",
        f"{AVERAGE_MARK} {format_decimal(summary.average_points)}",
        format_decimal(summary.total_credits),
    ]


def render_result_line(result: TranscriptResult) -> str:
    summary = result.summary
    line = (
        f"RESULT source={result.source or '-'} "
        f"groups={len(result.groups)} "
        f"modules={result.module_count} "
        f"average_grade={format_decimal(summary.average_grade)} "
        f"average_points={format_decimal(summary.average_points)} "
        f"total_credits={format_decimal(summary.total_credits)}"
    )
    if result.required_credits is not None:
        line += f" required_credits={format_decimal(result.required_credits)}"
    return line


def _format_elapsed(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line of a run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_modules=14,
        ...     start_time=t, end_time=t, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 modules=14 elapsed_sec=2'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"modules={result.total_modules} "
        f"elapsed_sec={_format_elapsed(result.elapsed_seconds)}"
    )


def result_to_dict(result: TranscriptResult) -> dict[str, Any]:
    """JSON-ready form of a TranscriptResult (non-finite floats are kept as-is)."""
    data = asdict(result)
    data["summary"]["cells"] = render_result_cells(result.summary)
    return data
