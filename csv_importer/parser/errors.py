from __future__ import annotations

from collections.abc import Sequence

"""Exception hierarchy for CSV conversion.

ConversionError subclasses are fatal: they abort the whole conversion before
any record is produced. RowError subclasses are raised while building a single
row; the row pipeline catches them, records a diagnostic and moves on.
"""

__all__ = [
    "ConversionError",
    "EmptyInputError",
    "MissingDataRowsError",
    "SchemaError",
    "MissingMandatoryFieldsError",
    "RowError",
    "FieldCountMismatchError",
    "InvalidPropertyPathError",
]


class ConversionError(Exception):
    """Base class for fatal conversion errors."""


class EmptyInputError(ConversionError):
    """Raised when the input contains no logical lines."""

    def __init__(self) -> None:
        super().__init__("CSV file is empty")


class MissingDataRowsError(ConversionError):
    """Raised when the input has a header row but no data row."""

    def __init__(self) -> None:
        super().__init__("CSV file must have at least a header row and one data row")


class SchemaError(ConversionError):
    """Raised when the header row cannot be used for conversion."""


class MissingMandatoryFieldsError(SchemaError):
    """Raised when mandatory header paths are absent from the header row."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Missing mandatory fields: {', '.join(self.missing)}. "
            "These fields must be present in the first line (header row)."
        )


class RowError(Exception):
    """Base class for errors confined to one data row."""


class FieldCountMismatchError(RowError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Column count mismatch. Expected {expected}, got {actual}")


class InvalidPropertyPathError(RowError):
    def __init__(self, path: str, reason: str = "Empty key found") -> None:
        self.path = path
        super().__init__(f"Invalid property path: '{path}'. {reason}.")
