from __future__ import annotations
import json

from csv_importer.models.diagnostics import DiagnosticKind, RowDiagnostic
from csv_importer.models.error_record import ErrorRecord


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create(
        file="people.csv",
        row=10,
        error_type="FIELD_COUNT_MISMATCH",
        message="Column count mismatch. Expected 4, got 3",
    )
    data = json.loads(rec.to_json_line())
    assert data["file"] == "people.csv"
    assert data["row"] == 10
    assert data["error_type"] == "FIELD_COUNT_MISMATCH"
    assert data["timestamp"].endswith("Z")
    assert "+00:00" not in data["timestamp"]
    assert set(data.keys()) == {"timestamp", "file", "row", "error_type", "message"}


def test_file_level_row():
    rec = ErrorRecord.create("x.csv", -1, "EMPTY_INPUT", "CSV file is empty")
    assert json.loads(rec.to_json_line())["row"] == -1


def test_from_diagnostic():
    d = RowDiagnostic(4, DiagnosticKind.INVALID_PROPERTY_PATH, "bad", path="a..b")
    rec = ErrorRecord.from_diagnostic("x.csv", d)
    assert rec.row == 4
    assert rec.error_type == "INVALID_PROPERTY_PATH"
    assert rec.message == "bad"


def test_non_ascii_message_kept_readable():
    rec = ErrorRecord.create("données.csv", 2, "FIELD_COUNT_MISMATCH", "ligne ignorée")
    assert "données.csv" in rec.to_json_line()
