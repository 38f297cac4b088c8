from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..models.config_models import DEFAULT_MANDATORY_FIELDS
from ..models.diagnostics import FILE_LEVEL_ROW, DiagnosticKind, RowDiagnostic
from ..models.header import HeaderPath, HeaderSchema, HeaderStatistics
from .errors import MissingMandatoryFieldsError

"""Header schema validation.

- Mandatory-field check: every mandatory path must be present among the header
  cells, otherwise ``MissingMandatoryFieldsError`` (fatal, no data row is read).
- Grouping check: columns sharing a root property should form one contiguous
  run. Violations are warnings only and do not change how values are assigned.
- Header cells with an empty path segment are reported once here; rows that
  carry a value in such a column are skipped by the pipeline.
"""

__all__ = [
    "MANDATORY_FIELDS",
    "build_schema",
    "find_non_contiguous_groups",
    "header_statistics",
    "parse_header",
    "validate_headers",
]

logger = logging.getLogger(__name__)

MANDATORY_FIELDS = DEFAULT_MANDATORY_FIELDS


def parse_header(fields: Iterable[str]) -> list[HeaderPath]:
    """Turn tokenized header cells into header paths (parsed once per file)."""
    return [HeaderPath.parse(f) for f in fields]


def find_non_contiguous_groups(header_paths: Sequence[HeaderPath]) -> list[str]:
    """Return root properties whose columns are interleaved with other roots.

    Only roots appearing in more than one column are considered. Roots are
    returned in order of first appearance.
    """
    indices_by_root: dict[str, list[int]] = {}
    for index, path in enumerate(header_paths):
        indices_by_root.setdefault(path.root, []).append(index)

    offenders: list[str] = []
    for root, indices in indices_by_root.items():
        if len(indices) < 2:
            continue
        # indices are ascending, so contiguous means the span equals the count
        if indices[-1] - indices[0] + 1 != len(indices):
            offenders.append(root)
    return offenders


def validate_headers(
    header_paths: Sequence[HeaderPath],
    mandatory_fields: Sequence[str] = MANDATORY_FIELDS,
) -> list[RowDiagnostic]:
    """Validate header paths; return advisory warnings.

    Raises:
        MissingMandatoryFieldsError: naming every missing mandatory path
    """
    present = {p.raw for p in header_paths}
    missing = [f for f in mandatory_fields if f not in present]
    if missing:
        raise MissingMandatoryFieldsError(missing)
    logger.debug("all mandatory fields found in header row: %s", list(mandatory_fields))

    warnings: list[RowDiagnostic] = []
    for path in header_paths:
        if not path.is_valid:
            message = f"Header '{path.raw}' has an empty property name; values in this column cannot be assigned."
            logger.warning("Warning: %s", message)
            warnings.append(
                RowDiagnostic(FILE_LEVEL_ROW, DiagnosticKind.INVALID_HEADER, message, path=path.raw)
            )

    for root in find_non_contiguous_groups(header_paths):
        message = f"Sub-properties of '{root}' are not grouped together. This may affect data integrity."
        logger.warning("Warning: %s", message)
        warnings.append(
            RowDiagnostic(FILE_LEVEL_ROW, DiagnosticKind.NON_CONTIGUOUS_GROUP, message, path=root)
        )
    return warnings


def build_schema(
    header_fields: Iterable[str],
    mandatory_fields: Sequence[str] = MANDATORY_FIELDS,
) -> HeaderSchema:
    """Parse and validate the header row into an immutable HeaderSchema."""
    paths = parse_header(header_fields)
    logger.info("Found %d columns in header row", len(paths))
    warnings = validate_headers(paths, mandatory_fields)
    return HeaderSchema(paths=tuple(paths), warnings=tuple(warnings))


def header_statistics(header_paths: Sequence[HeaderPath]) -> HeaderStatistics:
    groups: dict[str, int] = {}
    nested = 0
    max_depth = 0
    for path in header_paths:
        if path.is_nested:
            nested += 1
        max_depth = max(max_depth, path.depth)
        groups[path.root] = groups.get(path.root, 0) + 1
    return HeaderStatistics(
        total_columns=len(header_paths),
        nested_properties=nested,
        max_depth=max_depth,
        property_groups=groups,
    )
