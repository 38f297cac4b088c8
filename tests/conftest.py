# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Callable
import pytest

from csv_importer.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    # every test starts from an unconfigured application logger
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
encoding: utf-8
mandatory_fields: [name.firstName, name.lastName, age]
progress_interval: 10000
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path) -> Callable[..., Path]:
    """Write a CSV file into ./data and return its path."""
    def _write(name: str, text: str, encoding: str = "utf-8") -> Path:
        path = temp_workdir / "data" / name
        path.write_bytes(text.encode(encoding))
        return path
    return _write


@pytest.fixture()
def people_csv_text() -> str:
    return (
        "name.firstName,name.lastName,age,address.city,address.zip\n"
        "Alice,Smith,30,NYC,10001\n"
        "Bob,Jones,45,Boston,02101\n"
        "Carol,White,17,,\n"
    )
