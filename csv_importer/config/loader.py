from __future__ import annotations

import codecs
import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_MANDATORY_FIELDS,
    DEFAULT_MAX_FILE_SIZE_MB,
    DEFAULT_PROGRESS_INTERVAL,
    ConverterConfig,
    ImportConfig,
)

"""Config loader.

Responsibilities:
- Load the YAML config (``config/import.yml`` by default)
- Validate it against ``config_schema.json``
- Apply defaults and environment overrides
- Return the immutable ImportConfig
"""

__all__ = [
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")

CONFIG_PATH_ENV = "CSV_IMPORT_CONFIG"
SOURCE_DIR_ENV = "CSV_IMPORT_SOURCE_DIR"
OUTPUT_DIR_ENV = "CSV_IMPORT_OUTPUT_DIR"


class ConfigError(Exception):
    pass


def resolve_config_path(cli_path: str | None = None) -> Path:
    """CLI argument > CSV_IMPORT_CONFIG > config/import.yml."""
    if cli_path:
        return Path(cli_path)
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails validation (missing required keys, wrong types,
            unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _check_encoding(name: str) -> str:
    try:
        codecs.lookup(name)
    except LookupError as e:
        raise ConfigError(f"unknown encoding: {name}") from e
    return name


def _build_config(data: Mapping[str, Any], environ: Mapping[str, str]) -> ImportConfig:
    converter = ConverterConfig(
        mandatory_fields=tuple(data.get("mandatory_fields", DEFAULT_MANDATORY_FIELDS)),
        progress_interval=data.get("progress_interval", DEFAULT_PROGRESS_INTERVAL),
        encoding=_check_encoding(data.get("encoding", "utf-8")),
        max_file_size_mb=data.get("max_file_size_mb", DEFAULT_MAX_FILE_SIZE_MB),
    )
    # environment (.env included) takes precedence over the YAML file
    source_directory = environ.get(SOURCE_DIR_ENV) or data["source_directory"]
    output_directory = environ.get(OUTPUT_DIR_ENV) or data.get("output_directory")
    return ImportConfig(
        source_directory=source_directory,
        converter=converter,
        output_directory=output_directory,
        output_format=data.get("output_format", "records"),
        age_report=data.get("age_report", False),
    )


def load_config(path: Path, environ: Mapping[str, str] | None = None) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    return _build_config(data, os.environ if environ is None else environ)
