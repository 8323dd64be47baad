"""Domain models for the qis-grades transcript summarizer.

This package contains the row, module, group and summary types shared by the
classifier, group builder, aggregator and presentation layers.
"""

from .config_models import GradesConfig, SourceConfig
from .module import ModuleGroup, ModuleRecord, WeightedModule
from .processing_result import FileStat, ProcessingResult
from .row_record import RowRecord
from .schema import DEFAULT_SCHEMA, RowSchema
from .summary import Summary, TranscriptResult

__all__ = [
    # Configuration models
    "GradesConfig",
    "SourceConfig",
    "RowSchema",
    "DEFAULT_SCHEMA",
    # Row and module models
    "RowRecord",
    "ModuleRecord",
    "ModuleGroup",
    "WeightedModule",
    # Result models
    "Summary",
    "TranscriptResult",
    "FileStat",
    "ProcessingResult",
]
