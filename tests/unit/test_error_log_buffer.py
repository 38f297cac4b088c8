from __future__ import annotations
import json
import re
from pathlib import Path

from csv_importer.logging.error_log import ErrorLogBuffer, ErrorRecord
from csv_importer.models.diagnostics import DiagnosticKind, RowDiagnostic

KEYS = {"timestamp", "file", "row", "error_type", "message"}


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("people.csv", 3, "FIELD_COUNT_MISMATCH", "Column count mismatch. Expected 4, got 3"))
    buf.append(ErrorRecord.create("people.csv", -1, "SCHEMA_ERROR", "Missing mandatory fields: age."))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent.resolve() == (temp_workdir / "logs").resolve()
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        obj = json.loads(raw)
        assert set(obj.keys()) == KEYS
    # buffer is cleared after flush
    assert len(buf) == 0


def test_error_log_buffer_multiple_flushes(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("a.csv", 2, "FIELD_COUNT_MISMATCH", "m1"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("a.csv", 4, "FIELD_COUNT_MISMATCH", "m2"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_flush_without_records_writes_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_extend_diagnostics(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.extend_diagnostics(
        "people.csv",
        [
            RowDiagnostic(-1, DiagnosticKind.NON_CONTIGUOUS_GROUP, "grouping", path="name"),
            RowDiagnostic(7, DiagnosticKind.INVALID_PROPERTY_PATH, "bad path", path="a..b"),
        ],
    )
    assert len(buf) == 2
    path = buf.flush()
    rows = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [(r["row"], r["error_type"]) for r in rows] == [
        (-1, "NON_CONTIGUOUS_GROUP"),
        (7, "INVALID_PROPERTY_PATH"),
    ]
    assert all(r["file"] == "people.csv" for r in rows)
