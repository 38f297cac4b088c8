from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .diagnostics import RowDiagnostic
from .header import HeaderSchema
from .row_data import NestedRecord

"""Processing result models for the CSV importer.

ConversionResult is the outcome of converting one CSV text (records plus
diagnostics). FileStat and ProcessingResult aggregate a batch run for the
SUMMARY output line; AgeDistribution is the optional age report.
"""


@dataclass(frozen=True)
class ConversionResult:
    """Records converted from one CSV text, with what was skipped and why.

    ``data_rows`` counts every non-blank data line seen, so
    ``len(records) == data_rows - skipped_rows`` always holds.
    """
    schema: HeaderSchema
    records: list[NestedRecord]
    diagnostics: list[RowDiagnostic]
    data_rows: int

    @property
    def skipped_rows(self) -> int:
        return sum(1 for d in self.diagnostics if d.is_skipped_row)

    @property
    def warnings(self) -> list[RowDiagnostic]:
        """Advisory (non row-skipping) diagnostics."""
        return [d for d in self.diagnostics if not d.is_skipped_row]


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics (internal helper for ProcessingResult)."""
    file_name: str
    status: str  # success/failed
    records: int
    skipped_rows: int
    elapsed_seconds: float
    warnings: int = 0


@dataclass(frozen=True)
class AgeBucket:
    """One age group of an AgeDistribution."""
    label: str  # display label, e.g. "20 to 40"
    key: str  # stable key, e.g. "20_to_40"
    count: int
    percentage: int  # rounded half-up


@dataclass(frozen=True)
class AgeDistribution:
    """Age-group breakdown of converted records."""
    total_users: int
    buckets: tuple[AgeBucket, ...]

    def as_dict(self) -> dict[str, dict[str, int]]:
        return {b.key: {"count": b.count, "percentage": b.percentage} for b in self.buckets}


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results and summary output for a batch run.

    Contains all metrics needed for the SUMMARY output line.
    """
    success_files: int
    failed_files: int
    total_records: int
    skipped_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float  # end - start
    throughput_rows_per_sec: float  # total_records / elapsed
    file_stats: list[FileStat] | None = None
    age_distribution: AgeDistribution | None = None
