from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..models.header import HeaderPath
from .coercion import coerce
from .errors import FieldCountMismatchError, InvalidPropertyPathError

"""Nested record builder.

Expands dot-notation header paths into a tree of dicts for one data row.
Depth is unbounded: ``a.b.c.d.e`` yields five nested levels.

Assignment rules:
- an empty field is skipped, so absent data never reaches coercion;
- intermediate segments are created as empty dicts when missing, and a
  scalar already sitting on an intermediate segment is replaced by a fresh
  dict (last write wins);
- the final segment receives the coerced value, overwriting what was there.
"""

__all__ = [
    "build_record",
    "set_nested_value",
]


def set_nested_value(target: dict[str, Any], path: HeaderPath, value: Any) -> None:
    """Assign ``value`` at ``path`` inside ``target``, creating containers.

    Raises:
        InvalidPropertyPathError: if any segment is empty or whitespace-only
    """
    *parents, last = path.segments
    current = target
    for key in parents:
        if not key.strip():
            raise InvalidPropertyPathError(path.raw, "Empty key found")
        child = current.get(key)
        if not isinstance(child, dict):
            child = {}
            current[key] = child
        current = child

    if not last.strip():
        raise InvalidPropertyPathError(path.raw, "Empty final key")
    current[last] = value


def build_record(header_paths: Sequence[HeaderPath], fields: Sequence[str]) -> dict[str, Any]:
    """Build the nested record for one row.

    Raises:
        FieldCountMismatchError: if ``fields`` and ``header_paths`` differ in length
        InvalidPropertyPathError: if a non-empty field sits under an invalid path
    """
    if len(fields) != len(header_paths):
        raise FieldCountMismatchError(len(header_paths), len(fields))

    record: dict[str, Any] = {}
    for path, raw in zip(header_paths, fields):
        if raw == "":
            continue
        set_nested_value(record, path, coerce(raw).value)
    return record
