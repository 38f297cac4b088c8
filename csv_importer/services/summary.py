from __future__ import annotations

from ..models.processing_result import AgeDistribution, ProcessingResult

"""Summary rendering: the SUMMARY line and the age distribution report."""

REPORT_WIDTH = 50
TABLE_WIDTH = 30
LABEL_WIDTH = 15


def _format_number(value: float) -> str:
    # Integers without decimals, very small numbers without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line for a batch run.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed}
    records={records} skipped_rows={skipped} elapsed_sec={elapsed} throughput_rps={throughput}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2023, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2023, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_records=1000,
        ...     skipped_rows=3, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=500.0
        ... )
        >>> render_summary_line(1, result)  # doctest: +ELLIPSIS
        'SUMMARY files=1/1 success=1 failed=0 records=1000 skipped_rows=3 elapsed_sec=2 ...'
    """
    elapsed_str = _format_number(result.elapsed_seconds)
    throughput_str = _format_number(result.throughput_rows_per_sec)

    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"records={result.total_records} "
        f"skipped_rows={result.skipped_rows} "
        f"elapsed_sec={elapsed_str} "
        f"throughput_rps={throughput_str}"
    )


def render_age_report(distribution: AgeDistribution) -> list[str]:
    """Render the fixed-width age distribution report as lines."""
    lines = [
        "=" * REPORT_WIDTH,
        "AGE DISTRIBUTION REPORT",
        "=" * REPORT_WIDTH,
        f"Total Users: {distribution.total_users}",
        "-" * TABLE_WIDTH,
        "Age-Group".ljust(LABEL_WIDTH) + "% Distribution",
        "-" * TABLE_WIDTH,
    ]
    for bucket in distribution.buckets:
        lines.append(bucket.label.ljust(LABEL_WIDTH) + str(bucket.percentage))
    lines.append("=" * REPORT_WIDTH)
    return lines
