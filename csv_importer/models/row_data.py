from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Row models for the CSV importer.

RawRow is one tokenized data row before building; NestedRecord is the tree
built from it. ``row_number`` is the 1-based logical line number in the source
file (the header row is row 1, so the first data row is row 2).
"""

__all__ = [
    "RawRow",
    "NestedRecord",
]


@dataclass(frozen=True)
class RawRow:
    """Trimmed field strings of a single data row, in header column order."""
    row_number: int
    fields: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.fields)


@dataclass(frozen=True)
class NestedRecord:
    """Nested record built from one valid data row.

    ``data`` maps a path segment to either a child ``dict`` (container) or a
    scalar leaf (``int``, ``float``, ``bool`` or ``str``). The tree is owned by
    this record alone and is not mutated after the pipeline emits it.
    """
    row_number: int
    data: dict[str, Any]

    def get(self, dotted_path: str, default: Any = None) -> Any:
        """Look up a value by dot-notation path (``name.firstName``)."""
        node: Any = self.data
        for segment in dotted_path.split("."):
            if not isinstance(node, dict) or segment not in node:
                return default
            node = node[segment]
        return node
