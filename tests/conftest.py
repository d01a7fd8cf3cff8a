# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from size_table.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("TRANSLATE_ACCESS_TOKEN", raising=False)
        yield p


@pytest.fixture()
def sample_glossary_csv() -> str:
    return "source,target\n肩宽,shoulder\n胸围,bust\nヒップ,臀围\n"


@pytest.fixture()
def write_glossary(temp_workdir: Path, sample_glossary_csv: str) -> Path:
    p = temp_workdir / "config" / "glossary.csv"
    p.write_text(sample_glossary_csv, encoding="utf-8")
    return p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """size_label_header: size label
on_duplicate: keep-first
columns:
  item_code: [品番]
  size_code: [SZ]
  measurement_text: [採寸]
glossary:
  path: config/glossary.csv
translation:
  enabled: false
  timeout: 5
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str, write_glossary: Path) -> Path:
    cfg = temp_workdir / "config" / "size_table.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def make_workbook(path: Path, rows: list[list[object]], sheet: str = "Sheet1") -> Path:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def sample_rows() -> list[list[object]]:
    return [
        ["品番", "SZ", "採寸"],
        ["B002", "M", "ヒップ:98 胸围:90"],
        ["A001", "S", "肩宽:42.5 胸围:104"],
        ["B002", "S", "ヒップ:96 胸围:88"],
        ["A001", "M", "肩宽：43.5　胸围: 106"],
    ]


@pytest.fixture()
def sample_workbook(temp_workdir: Path, sample_rows: list[list[object]]) -> Path:
    return make_workbook(temp_workdir / "data" / "sizes.xlsx", sample_rows)
