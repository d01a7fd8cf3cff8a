from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from size_table.services.errors import RemoteTranslationFailed, RemoteTranslationUnavailable
from size_table.services.translate_client import (
    TOKEN_ENV_VAR,
    TranslateClient,
    TranslateConfig,
    env_token_provider,
)


def _response(status: int, body=None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    resp.text = "upstream text"
    return resp


def _client(session: MagicMock, provider=None, config: TranslateConfig | None = None) -> TranslateClient:
    return TranslateClient(config or TranslateConfig(), token_provider=provider or (lambda: "tok"), session=session)


def test_translate_success_with_glossary():
    session = MagicMock()
    session.post.return_value = _response(
        200, {"glossaryTranslations": [{"translatedText": "臀围"}, {"translatedText": "前裆"}]}
    )
    client = _client(session)
    assert client.translate(["ヒップ", "股上"]) == ["臀围", "前裆"]

    _, kwargs = session.post.call_args
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert kwargs["json"]["sourceLanguageCode"] == "ja"
    assert kwargs["json"]["targetLanguageCode"] == "zh"
    assert kwargs["json"]["contents"] == ["ヒップ", "股上"]
    assert "glossaryConfig" in kwargs["json"]
    assert kwargs["timeout"] == 10.0


def test_translate_without_glossary_reads_translations():
    session = MagicMock()
    session.post.return_value = _response(200, {"translations": [{"translatedText": "腰围"}]})
    client = _client(session, config=TranslateConfig(glossary=None))
    assert client.translate(["ウエスト"]) == ["腰围"]
    _, kwargs = session.post.call_args
    assert "glossaryConfig" not in kwargs["json"]


def test_empty_input_makes_no_call():
    session = MagicMock()
    assert _client(session).translate([]) == []
    session.post.assert_not_called()


def test_error_response_is_failed_with_upstream_message():
    session = MagicMock()
    session.post.return_value = _response(400, {"error": {"message": "Invalid glossary"}})
    with pytest.raises(RemoteTranslationFailed) as e:
        _client(session).translate(["a"])
    assert e.value.message == "Invalid glossary"


def test_error_response_without_json_body():
    session = MagicMock()
    session.post.return_value = _response(500, ValueError("no json"))
    with pytest.raises(RemoteTranslationFailed) as e:
        _client(session).translate(["a"])
    assert "HTTP 500" in e.value.message


def test_timeout_is_unavailable():
    session = MagicMock()
    session.post.side_effect = requests.Timeout("slow")
    with pytest.raises(RemoteTranslationUnavailable):
        _client(session).translate(["a"])


def test_auth_rejection_drops_cached_token():
    session = MagicMock()
    session.post.side_effect = [
        _response(401, {"error": {"message": "expired"}}),
        _response(200, {"glossaryTranslations": [{"translatedText": "x"}]}),
    ]
    tokens = iter(["old", "new"])
    client = _client(session, provider=lambda: next(tokens))
    with pytest.raises(RemoteTranslationUnavailable):
        client.translate(["a"])
    assert client.translate(["a"]) == ["x"]
    _, kwargs = session.post.call_args
    assert kwargs["headers"]["Authorization"] == "Bearer new"


def test_token_is_cached_between_calls():
    session = MagicMock()
    session.post.return_value = _response(200, {"glossaryTranslations": [{"translatedText": "x"}]})
    provider = MagicMock(return_value="tok")
    client = _client(session, provider=provider)
    client.translate(["a"])
    client.translate(["b"])
    assert provider.call_count == 1


def test_credential_failure_is_unavailable():
    def provider():
        raise RuntimeError("no credentials")

    with pytest.raises(RemoteTranslationUnavailable):
        _client(MagicMock(), provider=provider).translate(["a"])


def test_env_token_provider(monkeypatch):
    monkeypatch.setenv(TOKEN_ENV_VAR, " abc ")
    assert env_token_provider() == "abc"
    monkeypatch.delenv(TOKEN_ENV_VAR)
    with pytest.raises(RuntimeError):
        env_token_provider()


@pytest.mark.parametrize(
    "body",
    [
        ["unexpected"],
        "plain string",
        {},
        {"translations": "x"},
        {"translations": ["x"]},
        {"glossaryTranslations": [{"model": "nmt"}]},
        {"translations": [{"translatedText": ""}]},
        {"translations": [{"translatedText": 3}]},
    ],
)
def test_malformed_success_body_is_failed(body):
    session = MagicMock()
    session.post.return_value = _response(200, body)
    with pytest.raises(RemoteTranslationFailed) as e:
        _client(session).translate(["a"])
    assert "malformed response" in e.value.message
