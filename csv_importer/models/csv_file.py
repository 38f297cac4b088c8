from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .diagnostics import RowDiagnostic

"""CsvFile domain model and FileStatus enum.

The CsvFile represents the processing context for a single CSV file,
tracking its status through the import lifecycle from pending to success/failed.
"""


class FileStatus(Enum):
    """Status enum for CsvFile processing lifecycle.

    State transitions: pending -> processing -> (success | failed)

    - PENDING: File discovered but not yet processed
    - PROCESSING: File is currently being converted
    - SUCCESS: Conversion finished (rows may still have been skipped)
    - FAILED: Conversion aborted by a fatal error
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class CsvFile:
    """Processing context for a single CSV file.

    ``records`` counts converted records; ``skipped_rows`` counts data rows
    dropped by field-count or path errors. A file with skipped rows is still a
    SUCCESS: only fatal conversion errors fail a file.
    """
    path: Path                          # Full path to CSV file
    name: str                           # File name
    start_time: datetime | None = None  # Processing start (UTC)
    end_time: datetime | None = None    # Processing end (UTC)
    status: FileStatus = FileStatus.PENDING
    records: int = 0                    # Converted record count
    skipped_rows: int = 0               # Data rows skipped with a diagnostic
    warnings: int = 0                   # Advisory header warnings
    diagnostics: tuple[RowDiagnostic, ...] = ()
    output_path: Path | None = None     # JSON Lines output, when written
    error: str | None = None            # Failure reason summary
