from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ImportConfig
from ..models.csv_file import CsvFile, FileStatus
from ..models.diagnostics import FILE_LEVEL_ROW
from ..models.processing_result import ConversionResult, FileStat, ProcessingResult
from ..models.row_data import NestedRecord
from ..parser.errors import ConversionError, SchemaError
from ..parser.pipeline import convert_file
from .age_distribution import calculate_age_distribution
from .payload import split_user_payload
from .progress import ProgressTracker

"""Service orchestration for the CSV importer.

Coordinates a batch run: scan the source directory, convert each file on its
own, write JSON Lines output, buffer diagnostics into the error log, and
aggregate the metrics reported on the SUMMARY line.

A fatal conversion error fails only the file it happened in; skipped rows do
not fail a file.
"""

logger = logging.getLogger(__name__)

CSV_SUFFIX = ".csv"


class ProcessingError(Exception):
    """Base exception for processing errors."""
    pass


class FileTooLargeError(ProcessingError):
    pass


def scan_csv_files(directory: Path) -> list[Path]:
    """Scan directory for .csv files (non-recursive), sorted by name.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == CSV_SUFFIX),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def write_jsonl(records: Iterable[NestedRecord], output_path: Path, output_format: str = "records") -> int:
    """Write records as JSON Lines; returns the number of lines written."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with output_path.open("w", encoding="utf-8") as f:
        for record in records:
            if output_format == "users":
                payload = split_user_payload(record).to_dict()
            else:
                payload = record.data
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")
            count += 1
    return count


def _check_size(file_path: Path, max_bytes: int) -> None:
    size = file_path.stat().st_size
    if size > max_bytes:
        raise FileTooLargeError(
            f"file too large: {size} bytes (limit {max_bytes // (1024 * 1024)}MB)"
        )


def _failed(file_path: Path, start_time: datetime, error: str) -> CsvFile:
    return CsvFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error=error,
    )


def _process_single_file(
    file_path: Path,
    config: ImportConfig,
    error_log: ErrorLogBuffer,
    progress: ProgressTracker,
    ages: list[int] | None,
) -> CsvFile:
    """Convert a single CSV file.

    Fatal conversion errors, read errors and output errors are recorded in the
    error log with row -1 and returned as a FAILED CsvFile; they never
    propagate to the caller.
    """
    start_time = datetime.now(UTC)
    settings = config.converter

    def record_failure(error_type: str, message: str) -> CsvFile:
        logger.error("file=%s %s: %s", file_path.name, error_type, message)
        error_log.append(ErrorRecord.create(file_path.name, FILE_LEVEL_ROW, error_type, message))
        return _failed(file_path, start_time, message)

    try:
        _check_size(file_path, settings.max_file_size_bytes)
        conversion: ConversionResult = convert_file(
            file_path,
            encoding=settings.encoding,
            mandatory_fields=settings.mandatory_fields,
            progress_interval=settings.progress_interval,
            progress_hook=progress.row_reporter(file_path.name),
        )
    except FileTooLargeError as e:
        return record_failure("FILE_TOO_LARGE", str(e))
    except SchemaError as e:
        return record_failure("SCHEMA_ERROR", str(e))
    except ConversionError as e:
        return record_failure("INPUT_ERROR", str(e))
    except UnicodeDecodeError as e:
        return record_failure("DECODE_ERROR", f"cannot decode as {settings.encoding}: {e}")
    except OSError as e:
        return record_failure("READ_ERROR", str(e))

    error_log.extend_diagnostics(file_path.name, conversion.diagnostics)

    output_path = None
    if config.output_directory:
        output_path = Path(config.output_directory) / f"{file_path.stem}.jsonl"
        try:
            write_jsonl(conversion.records, output_path, config.output_format)
        except OSError as e:
            return record_failure("OUTPUT_ERROR", str(e))
        logger.debug("file=%s wrote %s", file_path.name, output_path)

    if ages is not None:
        ages.extend(split_user_payload(r).age for r in conversion.records)

    logger.info(
        "file=%s records=%d skipped_rows=%d warnings=%d",
        file_path.name,
        len(conversion.records),
        conversion.skipped_rows,
        len(conversion.warnings),
    )
    return CsvFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        records=len(conversion.records),
        skipped_rows=conversion.skipped_rows,
        warnings=len(conversion.warnings),
        diagnostics=tuple(conversion.diagnostics),
        output_path=output_path,
    )


def process_all(
    config: ImportConfig,
    files: Sequence[Path] | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Convert every CSV file of a run.

    This is the main orchestration function that:
    1. Scans the source directory for .csv files (unless ``files`` is given)
    2. Converts each file independently
    3. Aggregates metrics and results
    4. Flushes the error log once

    Raises:
        ProcessingError: For fatal errors that prevent processing
    """
    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer()

    if files is None:
        file_paths = scan_csv_files(Path(config.source_directory))
    else:
        file_paths = list(files)

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_records = 0
    total_skipped = 0
    ages: list[int] | None = [] if config.age_report else None

    with ProgressTracker(len(file_paths), description="Converting files") as progress:
        for file_path in file_paths:
            progress.start_file(file_path)

            file_result = _process_single_file(file_path, config, error_log, progress, ages)

            if file_result.status == FileStatus.SUCCESS:
                success_count += 1
                total_records += file_result.records
                total_skipped += file_result.skipped_rows
            else:
                failed_count += 1

            progress.set_postfix(success=success_count, failed=failed_count, records=total_records)
            progress.finish_file(success=(file_result.status == FileStatus.SUCCESS))

            elapsed = (file_result.end_time - file_result.start_time).total_seconds()
            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status=file_result.status.value,
                    records=file_result.records,
                    skipped_rows=file_result.skipped_rows,
                    elapsed_seconds=elapsed,
                    warnings=file_result.warnings,
                )
            )

    # Flush error log once
    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning("failed to write error log: %s", e)
    else:
        if log_path is not None:
            logger.info("error log: %s", log_path)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = total_records / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_records=total_records,
        skipped_rows=total_skipped,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        file_stats=file_stats,
        age_distribution=calculate_age_distribution(ages) if ages is not None else None,
    )
