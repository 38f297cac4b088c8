from __future__ import annotations
from pathlib import Path

from csv_importer.cli import main as cli_main

HEADER = "name.firstName,name.lastName,age"


def test_cli_no_files_success(write_config, temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=0/0 success=0 failed=0 records=0 skipped_rows=0" in out


def test_cli_directory_missing(write_config, temp_workdir: Path, capsys):
    cfg_path = temp_workdir / "config" / "import.yml"
    text = cfg_path.read_text(encoding="utf-8").replace("./data", "./missing_dir")
    cfg_path.write_text(text, encoding="utf-8")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR Directory not found:" in out


def test_cli_converts_files(write_config, write_csv, temp_workdir: Path, capsys):
    write_csv("people.csv", f"{HEADER},address.city\nAlice,Smith,30,NYC\nBob,Jones,x\n")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "WARN Row 3: Column count mismatch. Expected 4, got 3. Skipping row." in out
    assert "SUMMARY files=1/1 success=1 failed=0 records=1 skipped_rows=1" in out
    assert (temp_workdir / "out" / "people.jsonl").exists()


def test_cli_explicit_config_path(temp_workdir: Path, capsys):
    alt = temp_workdir / "alt.yml"
    alt.write_text("source_directory: ./data\n", encoding="utf-8")
    code = cli_main(["--config", str(alt)])
    assert code == 0
    assert "SUMMARY files=0/0" in capsys.readouterr().out


def test_cli_config_from_env_file(temp_workdir: Path, capsys, monkeypatch):
    # registered so the values loaded from .env are removed again afterwards
    monkeypatch.setenv("CSV_IMPORT_CONFIG", "")
    monkeypatch.setenv("CSV_IMPORT_SOURCE_DIR", "")
    (temp_workdir / "other").mkdir()
    (temp_workdir / "other" / "x.csv").write_text(f"{HEADER}\nA,B,1\n", encoding="utf-8")
    (temp_workdir / "alt.yml").write_text("source_directory: ./data\n", encoding="utf-8")
    (temp_workdir / ".env").write_text(
        "CSV_IMPORT_CONFIG=alt.yml\nCSV_IMPORT_SOURCE_DIR=./other\n", encoding="utf-8"
    )
    code = cli_main([])
    assert code == 0
    assert "SUMMARY files=1/1 success=1" in capsys.readouterr().out


def test_cli_positional_paths(write_config, write_csv, temp_workdir: Path, capsys):
    a = write_csv("a.csv", f"{HEADER}\nA,B,1\n")
    write_csv("b.csv", f"{HEADER}\nC,D,2\n")
    code = cli_main([str(a)])
    assert code == 0
    assert "SUMMARY files=1/1 success=1 failed=0 records=1" in capsys.readouterr().out


def test_cli_debug_mode(write_config, temp_workdir: Path, capsys):
    code = cli_main(["--debug"])
    assert code == 0
    assert "DEBUG debug mode enabled" in capsys.readouterr().out


def test_cli_inspect_data(write_config, write_csv, temp_workdir: Path, capsys):
    write_csv("people.csv", f"{HEADER},address.city,address.geo.lat\nAlice,Smith,30,NYC,40.7\n")
    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: people.csv" in out
    assert "columns=5 nested=4 max_depth=3" in out
    assert "group address: 2 column(s)" in out
    assert "address.geo.lat" in out
    assert "SUMMARY" not in out
    assert not (temp_workdir / "out").exists()


def test_cli_inspect_data_reports_errors(write_config, write_csv, temp_workdir: Path, capsys):
    write_csv("empty.csv", "")
    code = cli_main(["--inspect-data"])
    assert code == 0
    assert "error: CSV file is empty" in capsys.readouterr().out


def test_cli_age_report(write_config, write_csv, temp_workdir: Path, capsys):
    write_csv("people.csv", f"{HEADER}\nA,B,10\nC,D,30\n")
    code = cli_main(["--age-report"])
    out = capsys.readouterr().out
    assert code == 0
    assert "AGE DISTRIBUTION REPORT" in out
    assert "Total Users: 2" in out
    assert "< 20           50" in out
