from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import requests

from .errors import RemoteTranslationFailed, RemoteTranslationUnavailable

"""Remote translation capability (Cloud Translation v3 ``translateText``).

The client owns one requests.Session and a cached bearer token. The token is
obtained from a token provider callable on first use and reused until the
service answers 401/403, after which it is dropped and fetched again on the
next call. A single lock is held for the whole translate call so a shared
client never races on the cached token.
"""

__all__ = [
    "TranslateConfig",
    "TranslateClient",
    "env_token_provider",
    "TOKEN_ENV_VAR",
]

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "TRANSLATE_ACCESS_TOKEN"

TokenProvider = Callable[[], str]


@dataclass(frozen=True)
class TranslateConfig:
    endpoint: str = (
        "https://translation.googleapis.com/v3/projects/phdb-translate/"
        "locations/us-central1:translateText"
    )
    source_language: str = "ja"
    target_language: str = "zh"
    glossary: str | None = "projects/phdb-translate/locations/us-central1/glossaries/phdb-glossary1"
    timeout: float = 10.0


def env_token_provider() -> str:
    token = os.getenv(TOKEN_ENV_VAR, "").strip()
    if not token:
        raise RuntimeError(f"{TOKEN_ENV_VAR} is not set")
    return token


def _build_session() -> requests.Session:
    s = requests.Session()
    s.headers.update(
        {
            "Content-Type": "application/json; charset=utf-8",
            "Accept": "application/json",
            "User-Agent": "size-table-generator/1.0",
        }
    )
    return s


class TranslateClient:
    """``translate(list[str]) -> list[str]`` over HTTP."""

    def __init__(
        self,
        config: TranslateConfig | None = None,
        token_provider: TokenProvider = env_token_provider,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or TranslateConfig()
        self._token_provider = token_provider
        self._session = session or _build_session()
        self._token: str | None = None
        self._lock = threading.Lock()

    def _ensure_token(self) -> str:
        if self._token is None:
            try:
                token = self._token_provider()
            except Exception as e:
                raise RemoteTranslationUnavailable(f"credential acquisition failed: {e}") from e
            if not token:
                raise RemoteTranslationUnavailable("credential acquisition returned empty token")
            self._token = token
        return self._token

    def build_payload(self, inputs: Sequence[str]) -> dict:
        payload: dict = {
            "sourceLanguageCode": self.config.source_language,
            "targetLanguageCode": self.config.target_language,
            "contents": list(inputs),
        }
        if self.config.glossary:
            payload["glossaryConfig"] = {"glossary": self.config.glossary}
        return payload

    def translate(self, inputs: Sequence[str]) -> list[str]:
        """Translate inputs, returning a parallel list.

        Raises:
            RemoteTranslationFailed: the service returned an error response
            RemoteTranslationUnavailable: transport, timeout or credential failure
        """
        if not inputs:
            return []
        with self._lock:
            token = self._ensure_token()
            try:
                resp = self._session.post(
                    self.config.endpoint,
                    json=self.build_payload(inputs),
                    headers={"Authorization": f"Bearer {token}"},
                    timeout=self.config.timeout,
                )
            except requests.RequestException as e:
                raise RemoteTranslationUnavailable(f"translate request failed: {e}") from e

            if resp.status_code in (401, 403):
                self._token = None
                raise RemoteTranslationUnavailable(f"translate auth rejected: HTTP {resp.status_code}")
            if resp.status_code >= 300:
                raise RemoteTranslationFailed(_error_message(resp))

            try:
                data = resp.json()
            except ValueError as e:
                raise RemoteTranslationFailed(f"invalid response body: {e}") from e

        key, out = _translated_texts(data)
        logger.debug(f"translated {len(inputs)} name(s) via {key}")
        return out


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}: {resp.text[:200]}"
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict) and err.get("message"):
        return str(err["message"])
    return f"HTTP {resp.status_code}"


def _translated_texts(data: object) -> tuple[str, list[str]]:
    """Pull ``translatedText`` out of a translateText response body.

    Glossary translations win when present. Any other shape, or an entry
    without a non-empty ``translatedText`` string, is a malformed response.
    """
    if not isinstance(data, dict):
        raise RemoteTranslationFailed(f"malformed response: expected object, got {type(data).__name__}")
    key = "glossaryTranslations" if data.get("glossaryTranslations") else "translations"
    translations = data.get(key)
    if not isinstance(translations, list):
        raise RemoteTranslationFailed(f"malformed response: {key!r} is not a list")
    out: list[str] = []
    for i, entry in enumerate(translations):
        text = entry.get("translatedText") if isinstance(entry, dict) else None
        if not isinstance(text, str) or not text:
            raise RemoteTranslationFailed(f"malformed response: {key}[{i}] has no translatedText")
        out.append(text)
    return key, out
