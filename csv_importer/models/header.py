from __future__ import annotations

from dataclasses import dataclass, field

from .diagnostics import RowDiagnostic

"""Header models for the CSV importer.

HeaderPath is one header cell split on ``.``; HeaderSchema is the immutable
per-file schema computed once from the header row and reused for every data
row. HeaderStatistics summarises the header shape for inspection output.
"""

__all__ = [
    "PATH_SEPARATOR",
    "HeaderPath",
    "HeaderSchema",
    "HeaderStatistics",
]

PATH_SEPARATOR = "."


@dataclass(frozen=True)
class HeaderPath:
    """Dot-notation property path from one header cell.

    ``raw`` is the trimmed header cell (``address.city``); ``segments`` is the
    split form (``("address", "city")``). A path with an empty or
    whitespace-only segment is kept but flagged invalid: rows that carry a
    value in that column fail to build.
    """
    raw: str
    segments: tuple[str, ...]

    @classmethod
    def parse(cls, raw: str) -> HeaderPath:
        return cls(raw=raw, segments=tuple(raw.split(PATH_SEPARATOR)))

    @property
    def root(self) -> str:
        return self.segments[0]

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def is_nested(self) -> bool:
        return len(self.segments) > 1

    @property
    def is_valid(self) -> bool:
        return all(s.strip() for s in self.segments)

    def __str__(self) -> str:  # pragma: no cover (trivial)
        return self.raw


@dataclass(frozen=True)
class HeaderSchema:
    """Validated header row of one CSV file.

    Created once before any data row is processed; ``warnings`` holds the
    advisory diagnostics (non-contiguous groups, invalid paths) found while
    validating it.
    """
    paths: tuple[HeaderPath, ...]
    warnings: tuple[RowDiagnostic, ...] = ()

    def __len__(self) -> int:
        return len(self.paths)

    @property
    def names(self) -> list[str]:
        return [p.raw for p in self.paths]


@dataclass(frozen=True)
class HeaderStatistics:
    """Shape summary of a header row (column count, nesting, groups)."""
    total_columns: int
    nested_properties: int  # columns with at least one '.'
    max_depth: int
    property_groups: dict[str, int] = field(default_factory=dict)  # root -> column count
