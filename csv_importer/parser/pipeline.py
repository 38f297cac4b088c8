from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from itertools import chain
from pathlib import Path

from ..models.config_models import DEFAULT_PROGRESS_INTERVAL
from ..models.diagnostics import DiagnosticKind, RowDiagnostic
from ..models.header import HeaderSchema
from ..models.processing_result import ConversionResult
from ..models.row_data import NestedRecord, RawRow
from .builder import build_record
from .errors import EmptyInputError, FieldCountMismatchError, InvalidPropertyPathError, MissingDataRowsError
from .schema import MANDATORY_FIELDS, build_schema
from .tokenizer import DEFAULT_CHUNK_SIZE, iter_logical_lines, read_text_chunks, tokenize_row

"""Row pipeline: header barrier, then one pass over the data rows.

The header row is tokenized, parsed and validated before any data row is
looked at; a fatal schema error therefore never leaves partial output. Data
rows are then built one at a time. A row with the wrong field count, or one
that fails to build, is skipped with a warning and a RowDiagnostic; the
conversion carries on with the next row.

Row numbers are 1-based logical line numbers: the header is row 1, so the
first data row is row 2. Blank lines are not counted.
"""

__all__ = [
    "ProgressHook",
    "RowPipeline",
    "convert",
    "convert_file",
]

logger = logging.getLogger(__name__)

ProgressHook = Callable[[int], None]


class RowPipeline:
    """Single-use converter from logical lines to nested records.

    ``run`` is a generator; diagnostics accumulate on the instance while it is
    consumed, so read ``diagnostics`` once the generator is exhausted.
    """

    def __init__(
        self,
        *,
        mandatory_fields: Sequence[str] = MANDATORY_FIELDS,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        progress_hook: ProgressHook | None = None,
    ) -> None:
        self.mandatory_fields = tuple(mandatory_fields)
        self.progress_interval = progress_interval
        self.progress_hook = progress_hook
        self.schema: HeaderSchema | None = None
        self.diagnostics: list[RowDiagnostic] = []
        self.data_rows = 0
        self.processed_rows = 0

    def run(self, lines: Iterable[str]) -> Iterator[NestedRecord]:
        """Yield one NestedRecord per valid data row, in input order.

        Raises:
            EmptyInputError: no logical line at all
            MissingDataRowsError: a header row but no data row
            MissingMandatoryFieldsError: header lacks a mandatory path
        """
        it = iter(lines)
        header_line = next(it, None)
        if header_line is None:
            raise EmptyInputError()
        first_data_line = next(it, None)
        if first_data_line is None:
            raise MissingDataRowsError()

        schema = build_schema(tokenize_row(header_line), self.mandatory_fields)
        self.schema = schema
        self.diagnostics.extend(schema.warnings)

        for row_number, line in enumerate(chain((first_data_line,), it), start=2):
            self.data_rows += 1
            row = RawRow(row_number=row_number, fields=tuple(tokenize_row(line)))
            try:
                data = build_record(schema.paths, row.fields)
            except FieldCountMismatchError as e:
                self._skip(row.row_number, DiagnosticKind.FIELD_COUNT_MISMATCH, str(e))
                continue
            except InvalidPropertyPathError as e:
                self._skip(
                    row.row_number,
                    DiagnosticKind.INVALID_PROPERTY_PATH,
                    f"Error creating object - {e}",
                    path=e.path,
                )
                continue

            self.processed_rows += 1
            if self.progress_interval > 0 and self.processed_rows % self.progress_interval == 0:
                logger.info("Processed %d rows...", self.processed_rows)
                if self.progress_hook is not None:
                    self.progress_hook(self.processed_rows)
            yield NestedRecord(row_number=row.row_number, data=data)

        logger.info("Successfully processed %d data rows", self.processed_rows)

    def _skip(self, row_number: int, kind: DiagnosticKind, message: str, path: str | None = None) -> None:
        logger.warning("Row %d: %s. Skipping row.", row_number, message.rstrip("."))
        self.diagnostics.append(RowDiagnostic(row_number, kind, message, path=path))

    def result(self, records: list[NestedRecord]) -> ConversionResult:
        if self.schema is None:
            raise RuntimeError("pipeline has not read a header row yet")
        return ConversionResult(
            schema=self.schema,
            records=records,
            diagnostics=list(self.diagnostics),
            data_rows=self.data_rows,
        )


def convert(
    text: str,
    *,
    mandatory_fields: Sequence[str] = MANDATORY_FIELDS,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    progress_hook: ProgressHook | None = None,
) -> ConversionResult:
    """Convert a whole CSV text into nested records plus diagnostics."""
    pipeline = RowPipeline(
        mandatory_fields=mandatory_fields,
        progress_interval=progress_interval,
        progress_hook=progress_hook,
    )
    records = list(pipeline.run(iter_logical_lines(text)))
    return pipeline.result(records)


def convert_file(
    path: Path,
    *,
    encoding: str = "utf-8",
    mandatory_fields: Sequence[str] = MANDATORY_FIELDS,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    progress_hook: ProgressHook | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> ConversionResult:
    """Convert a CSV file, streaming it in chunks rather than reading it whole."""
    logger.info("Starting CSV file parsing: %s", path.name)
    pipeline = RowPipeline(
        mandatory_fields=mandatory_fields,
        progress_interval=progress_interval,
        progress_hook=progress_hook,
    )
    lines = iter_logical_lines(read_text_chunks(path, encoding=encoding, chunk_size=chunk_size))
    records = list(pipeline.run(lines))
    logger.info("CSV parsing completed. Processed %d records.", len(records))
    return pipeline.result(records)
