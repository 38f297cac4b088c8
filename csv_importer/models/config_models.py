from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the CSV importer.

Built by ``csv_importer.config.loader.load_config`` after schema validation;
defaults here mirror the defaults declared in ``config_schema.json``.
"""

DEFAULT_MANDATORY_FIELDS: tuple[str, ...] = ("name.firstName", "name.lastName", "age")
DEFAULT_PROGRESS_INTERVAL = 10_000
DEFAULT_MAX_FILE_SIZE_MB = 50
OUTPUT_FORMATS = ("records", "users")


@dataclass(frozen=True)
class ConverterConfig:
    """Settings that shape a single conversion."""
    mandatory_fields: tuple[str, ...] = DEFAULT_MANDATORY_FIELDS
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
    encoding: str = "utf-8"
    max_file_size_mb: int = DEFAULT_MAX_FILE_SIZE_MB

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for a batch import run."""
    source_directory: str  # Directory to scan for CSV files
    converter: ConverterConfig
    output_directory: str | None = None  # JSON Lines output; None = no output files
    output_format: str = "records"  # records | users
    age_report: bool = False
