"""Domain models for the CSV -> nested record importer.

This package contains the domain model classes used throughout the application:
header paths and schema, typed values, rows and records, diagnostics, and the
per-file / per-run processing results.
"""

from .config_models import ConverterConfig, ImportConfig
from .csv_file import CsvFile, FileStatus
from .diagnostics import FILE_LEVEL_ROW, DiagnosticKind, RowDiagnostic
from .header import HeaderPath, HeaderSchema, HeaderStatistics
from .processing_result import (
    AgeBucket,
    AgeDistribution,
    ConversionResult,
    FileStat,
    ProcessingResult,
)
from .row_data import NestedRecord, RawRow
from .typed_value import TypedValue, ValueKind

__all__ = [
    # Configuration models
    "ConverterConfig",
    "ImportConfig",
    # Header models
    "HeaderPath",
    "HeaderSchema",
    "HeaderStatistics",
    # Row models
    "RawRow",
    "NestedRecord",
    "TypedValue",
    "ValueKind",
    # Diagnostics and results
    "FILE_LEVEL_ROW",
    "DiagnosticKind",
    "RowDiagnostic",
    "ConversionResult",
    "CsvFile",
    "FileStatus",
    "FileStat",
    "ProcessingResult",
    "AgeBucket",
    "AgeDistribution",
]
