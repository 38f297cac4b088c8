from __future__ import annotations

import argparse
import dataclasses
import sys
from itertools import islice
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config, resolve_config_path
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import ImportConfig
from ..parser.errors import ConversionError
from ..parser.pipeline import RowPipeline
from ..parser.schema import header_statistics
from ..parser.tokenizer import iter_logical_lines, read_text_chunks
from ..services.orchestrator import ProcessingError, process_all, scan_csv_files
from ..services.summary import render_age_report, render_summary_line

"""CLI entrypoint.

Flow:
- Load ``.env`` (python-dotenv, overriding the process environment)
- Resolve and load the YAML config
- Convert every .csv file of the source directory, or the paths given
- Emit the SUMMARY line (and the age report when asked for)

Exit codes: 0 all files converted, 2 at least one file failed, 1 fatal.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values override the existing environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="CSV -> nested JSON records converter")
    p.add_argument("paths", nargs="*", type=Path, help="CSV files to convert (default: scan source_directory)")
    p.add_argument("--config", help="Path to the YAML config (default: config/import.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print header statistics & first records then exit")
    p.add_argument("--age-report", action="store_true", help="Print the age distribution report after the run")
    return p.parse_args(argv)


def _inspect_file(path: Path, cfg: ImportConfig) -> None:
    settings = cfg.converter
    pipeline = RowPipeline(mandatory_fields=settings.mandatory_fields, progress_interval=0)
    lines = iter_logical_lines(read_text_chunks(path, encoding=settings.encoding))
    sample = list(islice(pipeline.run(lines), INSPECT_SAMPLE_ROWS))

    if pipeline.schema is None:
        return
    stats = header_statistics(pipeline.schema.paths)
    print(f"  columns={stats.total_columns} nested={stats.nested_properties} max_depth={stats.max_depth}")
    for root, count in stats.property_groups.items():
        print(f"  group {root}: {count} column(s)")
    for diagnostic in pipeline.diagnostics:
        print(f"  warning: {diagnostic.message}")
    if sample:
        frame = pd.json_normalize([r.data for r in sample], sep=".")
        print(frame.to_string(index=False))


def _inspect_data(cfg: ImportConfig, paths: list[Path]) -> int:
    if not paths:
        print("inspect: no .csv files")
        return EXIT_SUCCESS_ALL
    for f in paths:
        print(f"FILE: {f.name}")
        try:
            _inspect_file(f, cfg)
        except ConversionError as e:
            print(f"  error: {e}")
        except (OSError, UnicodeDecodeError) as e:
            print(f"  read_error: {e}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an empty list must not fall back to sys.argv (pytest arguments)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    config_path = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.age_report and not cfg.age_report:
        cfg = dataclasses.replace(cfg, age_report=True)

    files: list[Path] | None = list(args.paths) or None
    if files is None:
        directory = Path(cfg.source_directory)
        try:
            files = scan_csv_files(directory)
        except ProcessingError as e:
            logger.error(f"{e}")
            return EXIT_FATAL
        logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(cfg, files)

    try:
        result = process_all(cfg, files=files)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.age_distribution is not None:
        for line in render_age_report(result.age_distribution):
            print(line)

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
