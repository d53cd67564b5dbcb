# Shared pytest fixtures
from __future__ import annotations

import io
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from tempcsv.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("TEMPCSV_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


def build_workbook(sheets: dict[str, list[list[object]]], engine: str = "openpyxl") -> bytes:
    """Write ``sheets`` (raw rows, no header handling) into an in-memory workbook."""
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine=engine) as writer:
        for name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=name, header=False, index=False)
    return buf.getvalue()


@pytest.fixture()
def make_workbook():
    return build_workbook


@pytest.fixture()
def sample_csv() -> str:
    return "id,name,city\n1,Alice,Paris\n2,Bob,Berlin\n3,Carol,Rome\n"


@pytest.fixture()
def sample_config_yaml() -> str:
    return """parser:
  delimiter: ";"
  has_headers: true
  detect_row_index: false
  skip_empty_lines: true
  dynamic_typing: false
viewer:
  max_columns: 20
  rows_per_page: 10
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "tempcsv.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
