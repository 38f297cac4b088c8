from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Row diagnostics reported alongside converted records.

Per-row problems never abort a conversion; they are captured here and returned
with the records. File-level (header) diagnostics use row -1.
"""

__all__ = [
    "FILE_LEVEL_ROW",
    "DiagnosticKind",
    "RowDiagnostic",
]

FILE_LEVEL_ROW = -1


class DiagnosticKind(Enum):
    """Classification of a diagnostic (value is the error log ``error_type``)."""
    FIELD_COUNT_MISMATCH = "FIELD_COUNT_MISMATCH"
    INVALID_PROPERTY_PATH = "INVALID_PROPERTY_PATH"
    NON_CONTIGUOUS_GROUP = "NON_CONTIGUOUS_GROUP"
    INVALID_HEADER = "INVALID_HEADER"

    @property
    def skips_row(self) -> bool:
        return self in (DiagnosticKind.FIELD_COUNT_MISMATCH, DiagnosticKind.INVALID_PROPERTY_PATH)


@dataclass(frozen=True)
class RowDiagnostic:
    """A skipped row or an advisory header warning.

    Attributes:
        row_number: 1-based logical line number (header = 1), or -1 for file-level
        kind: Diagnostic classification
        message: Human readable reason
        path: Header path or root property concerned, when there is one
    """
    row_number: int
    kind: DiagnosticKind
    message: str
    path: str | None = None

    @property
    def is_skipped_row(self) -> bool:
        return self.kind.skips_row
