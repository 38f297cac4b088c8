from __future__ import annotations

import dataclasses

import pytest

from csv_importer.models import (
    DiagnosticKind,
    NestedRecord,
    RawRow,
    RowDiagnostic,
    TypedValue,
    ValueKind,
)


def test_raw_row_len():
    row = RawRow(row_number=2, fields=("a", "b", ""))
    assert len(row) == 3


def test_nested_record_get_by_path():
    rec = NestedRecord(row_number=2, data={"name": {"firstName": "Alice"}, "age": 30})
    assert rec.get("name.firstName") == "Alice"
    assert rec.get("age") == 30
    assert rec.get("name") == {"firstName": "Alice"}


def test_nested_record_get_missing_returns_default():
    rec = NestedRecord(row_number=2, data={"age": 30, "name": {"firstName": "Alice"}})
    assert rec.get("address.city") is None
    assert rec.get("age.years", "n/a") == "n/a"
    assert rec.get("name.lastName", "") == ""


def test_models_are_frozen():
    rec = NestedRecord(row_number=2, data={})
    with pytest.raises(dataclasses.FrozenInstanceError):
        rec.row_number = 3  # type: ignore[misc]


def test_typed_value_constructors():
    assert TypedValue.integer(1).kind is ValueKind.INTEGER
    assert TypedValue.float_(1.5).kind is ValueKind.FLOAT
    assert TypedValue.boolean(False).kind is ValueKind.BOOLEAN
    assert TypedValue.string("x").kind is ValueKind.STRING


def test_diagnostic_kind_skips_row():
    assert DiagnosticKind.FIELD_COUNT_MISMATCH.skips_row
    assert DiagnosticKind.INVALID_PROPERTY_PATH.skips_row
    assert not DiagnosticKind.NON_CONTIGUOUS_GROUP.skips_row
    assert not DiagnosticKind.INVALID_HEADER.skips_row


def test_row_diagnostic_defaults():
    d = RowDiagnostic(5, DiagnosticKind.FIELD_COUNT_MISMATCH, "Column count mismatch. Expected 3, got 2")
    assert d.path is None
    assert d.is_skipped_row is True


def test_row_diagnostic_path_field():
    assert [f.name for f in dataclasses.fields(RowDiagnostic)] == ["row_number", "kind", "message", "path"]
    assert isinstance(RowDiagnostic.__dict__["is_skipped_row"], property)
    d = RowDiagnostic(-1, DiagnosticKind.NON_CONTIGUOUS_GROUP, "grouping", path="name")
    assert d.path == "name"
    assert d.is_skipped_row is False
