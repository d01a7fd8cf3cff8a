from __future__ import annotations

import json
from pathlib import Path

from size_table.cli import main as cli_main
from tests.conftest import make_workbook

"""End-to-end: workbook -> config + glossary -> JSON tables."""


def test_run_writes_tables(write_config: Path, sample_workbook: Path, temp_workdir: Path):
    out = temp_workdir / "out.json"
    assert cli_main([str(sample_workbook), "--output", str(out)]) == 0

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data == {
        "item_meta": [
            {
                "code": "A001",
                "size_code": "S",
                "table": {
                    "head": ["size label", "shoulder", "bust"],
                    "body": [["II", "42.5", "104"], ["III", "43.5", "106"]],
                },
            },
            {
                "code": "B002",
                "size_code": "M",
                "table": {
                    "head": ["size label", "臀围", "bust"],
                    "body": [["III", "98", "90"], ["II", "96", "88"]],
                },
            },
        ]
    }


def test_default_output_path_next_to_workbook(write_config: Path, sample_workbook: Path):
    assert cli_main([str(sample_workbook)]) == 0
    assert sample_workbook.with_suffix(".json").exists()


def test_duplicates_and_blank_rows_tolerated(write_config: Path, temp_workdir: Path):
    p = make_workbook(
        temp_workdir / "data" / "dups.xlsx",
        [
            ["品番", "SZ", "採寸"],
            ["A001", "S", "胸围:104"],
            [None, None, None],
            ["A001", "S", "胸围:999"],
            ["A001", "M", "胸围:106"],
        ],
    )
    out = temp_workdir / "dups.json"
    assert cli_main([str(p), "--output", str(out)]) == 0
    body = json.loads(out.read_text(encoding="utf-8"))["item_meta"][0]["table"]["body"]
    assert body == [["II", "104"], ["III", "106"]]


def test_duplicate_error_policy_from_config(write_config: Path, temp_workdir: Path, capsys):
    write_config.write_text(
        write_config.read_text(encoding="utf-8").replace("on_duplicate: keep-first", "on_duplicate: error"),
        encoding="utf-8",
    )
    p = make_workbook(
        temp_workdir / "data" / "dups.xlsx",
        [["品番", "SZ", "採寸"], ["A001", "S", "胸围:104"], ["A001", "S", "胸围:105"]],
    )
    assert cli_main([str(p)]) == 1
    assert "ERROR DUPLICATE_ROW" in capsys.readouterr().out


def test_inspect_data(write_config: Path, sample_workbook: Path, capsys):
    assert cli_main([str(sample_workbook), "--inspect-data"]) == 0
    out = capsys.readouterr().out
    assert "SHEET: Sheet1" in out
    assert "row 2:" in out
    assert not sample_workbook.with_suffix(".json").exists()
