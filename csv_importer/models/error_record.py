from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .diagnostics import RowDiagnostic

"""ErrorRecord model for error logging.

This module defines the ErrorRecord dataclass used for structured error logging
during CSV conversion. It supports row=-1 as a sentinel value for file-level
errors where no specific row applies (fatal header errors, unreadable files,
advisory header warnings).

The serialized form must validate against ``csv_importer/logging/error_log_schema.json``.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: CSV filename being processed
        row: Row number (1-based logical line). Use -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Error description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp.

        Parameters:
            file: CSV filename being processed
            row: Row number (1-based). Use -1 for file-level errors
            error_type: Error classification in UPPER_SNAKE_CASE format
            message: Error description

        Returns:
            New ErrorRecord instance with current UTC timestamp
        """
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def from_diagnostic(file: str, diagnostic: RowDiagnostic) -> ErrorRecord:
        return ErrorRecord.create(
            file=file,
            row=diagnostic.row_number,
            error_type=diagnostic.kind.value,
            message=diagnostic.message,
        )

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to JSON Lines format.

        Returns:
            JSON string representation without extra keys
        """
        return json.dumps(asdict(self), ensure_ascii=False)
