from __future__ import annotations

import re
from pathlib import Path

from csv_importer.cli import main as cli_main

"""SUMMARY output line contract."""

SUMMARY_RE = re.compile(
    r"^SUMMARY files=(\d+)/(\d+) success=(\d+) failed=(\d+) records=(\d+) "
    r"skipped_rows=(\d+) elapsed_sec=([0-9.]+) throughput_rps=([0-9.]+)$"
)


def _summary_lines(out: str) -> list[str]:
    return [line for line in out.splitlines() if line.startswith("SUMMARY")]


def test_summary_line_format(write_config, write_csv, temp_workdir: Path, capsys):
    write_csv("a.csv", "name.firstName,name.lastName,age\nA,B,1\nC,D,2\nshort\n")
    write_csv("b.csv", "")
    cli_main([])
    lines = _summary_lines(capsys.readouterr().out)
    assert len(lines) == 1
    m = SUMMARY_RE.match(lines[0])
    assert m is not None, lines[0]
    files, total, success, failed, records, skipped = (int(g) for g in m.groups()[:6])
    assert files == total == 2
    assert success + failed == total
    assert (success, failed, records, skipped) == (1, 1, 2, 1)


def test_summary_line_printed_once_with_no_files(write_config, temp_workdir: Path, capsys):
    cli_main([])
    lines = _summary_lines(capsys.readouterr().out)
    assert len(lines) == 1
    assert SUMMARY_RE.match(lines[0])
