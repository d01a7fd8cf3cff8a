from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from size_table.cli import main as cli_main
from tests.conftest import make_workbook

"""Remote fallback through the CLI (--remote) with the HTTP session faked."""


def _workbook(temp_workdir: Path) -> Path:
    return make_workbook(
        temp_workdir / "data" / "remote.xlsx",
        [["品番", "SZ", "採寸"], ["A001", "S", "肩宽:42 着丈:70"]],
    )


def _session(post_response: MagicMock) -> MagicMock:
    session = MagicMock()
    session.post.return_value = post_response
    return session


def test_remote_translates_glossary_misses(write_config: Path, temp_workdir: Path, monkeypatch):
    monkeypatch.setenv("TRANSLATE_ACCESS_TOKEN", "tok")
    resp = MagicMock()
    resp.status_code = 200
    resp.json.return_value = {"glossaryTranslations": [{"translatedText": "衣长"}]}
    session = _session(resp)
    out = temp_workdir / "remote.json"
    with patch("size_table.services.translate_client._build_session", return_value=session):
        assert cli_main([str(_workbook(temp_workdir)), "--remote", "--output", str(out)]) == 0
    head = json.loads(out.read_text(encoding="utf-8"))["item_meta"][0]["table"]["head"]
    assert head == ["size label", "shoulder", "衣长"]
    _, kwargs = session.post.call_args
    assert kwargs["json"]["contents"] == ["着丈"]


def test_remote_without_credentials_fails(write_config: Path, temp_workdir: Path, capsys):
    code = cli_main([str(_workbook(temp_workdir)), "--remote"])
    assert code == 1
    assert "ERROR REMOTE_TRANSLATION_UNAVAILABLE" in capsys.readouterr().out


def test_remote_error_response_fails(write_config: Path, temp_workdir: Path, monkeypatch, capsys):
    monkeypatch.setenv("TRANSLATE_ACCESS_TOKEN", "tok")
    resp = MagicMock()
    resp.status_code = 400
    resp.json.return_value = {"error": {"message": "Glossary not found"}}
    with patch("size_table.services.translate_client._build_session", return_value=_session(resp)):
        code = cli_main([str(_workbook(temp_workdir)), "--remote"])
    assert code == 1
    out = capsys.readouterr().out
    assert "ERROR REMOTE_TRANSLATION_FAILED" in out
    assert "Glossary not found" in out
