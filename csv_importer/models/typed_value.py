from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""TypedValue model: the tagged scalar produced from one raw CSV field.

A raw field string maps to exactly one of four kinds. The builder stores
``TypedValue.value`` (a plain Python scalar) as the leaf of a nested record.
"""

__all__ = [
    "TypedValue",
    "ValueKind",
]


class ValueKind(Enum):
    """Tag of a coerced field value."""
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"


@dataclass(frozen=True)
class TypedValue:
    """Coerced scalar with its kind.

    ``kind`` is authoritative: ``bool`` is an ``int`` subclass in Python, so
    callers must check the tag rather than ``isinstance(value, int)``.
    """
    kind: ValueKind
    value: int | float | bool | str

    @classmethod
    def integer(cls, value: int) -> TypedValue:
        return cls(ValueKind.INTEGER, value)

    @classmethod
    def float_(cls, value: float) -> TypedValue:
        return cls(ValueKind.FLOAT, value)

    @classmethod
    def boolean(cls, value: bool) -> TypedValue:
        return cls(ValueKind.BOOLEAN, value)

    @classmethod
    def string(cls, value: str) -> TypedValue:
        return cls(ValueKind.STRING, value)

    @property
    def is_numeric(self) -> bool:
        return self.kind in (ValueKind.INTEGER, ValueKind.FLOAT)
