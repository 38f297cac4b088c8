"""CSV parsing core: tokenizer, header schema, coercion, builder, row pipeline."""

from .builder import build_record
from .coercion import coerce
from .errors import (
    ConversionError,
    EmptyInputError,
    FieldCountMismatchError,
    InvalidPropertyPathError,
    MissingDataRowsError,
    MissingMandatoryFieldsError,
    RowError,
    SchemaError,
)
from .pipeline import RowPipeline, convert, convert_file
from .schema import build_schema, header_statistics, parse_header, validate_headers
from .tokenizer import iter_logical_lines, tokenize_lines, tokenize_row

__all__ = [
    "build_record",
    "build_schema",
    "coerce",
    "convert",
    "convert_file",
    "header_statistics",
    "iter_logical_lines",
    "parse_header",
    "tokenize_lines",
    "tokenize_row",
    "validate_headers",
    "RowPipeline",
    # errors
    "ConversionError",
    "EmptyInputError",
    "FieldCountMismatchError",
    "InvalidPropertyPathError",
    "MissingDataRowsError",
    "MissingMandatoryFieldsError",
    "RowError",
    "SchemaError",
]
