from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import requests

from .errors import RemoteTranslationFailed, RemoteTranslationUnavailable, TranslationError
from .glossary import load_glossary
from .translate_client import TranslateClient

if TYPE_CHECKING:
    from ..config.loader import AppConfig

"""Measurement name resolution.

resolve_local: glossary lookup with pass-through on miss; total, never raises.
resolve_remote: one call to the translation capability; errors surface to the
caller as TranslationError subclasses. No retry here.

The resolver is an explicitly constructed object handed to the pipeline; its
glossary is loaded once and never mutated.
"""

__all__ = [
    "Translator",
    "NameResolver",
]

logger = logging.getLogger(__name__)


class Translator(Protocol):
    def translate(self, inputs: Sequence[str]) -> list[str]: ...


class NameResolver:
    def __init__(self, glossary: Mapping[str, str] | None = None, translator: Translator | None = None) -> None:
        self._glossary: dict[str, str] = dict(glossary or {})
        self._translator = translator

    @classmethod
    def from_config(cls, config: AppConfig, session: requests.Session | None = None) -> NameResolver:
        glossary_path = Path(config.glossary_path) if config.glossary_path else None
        glossary = load_glossary(path=glossary_path, url=config.glossary_url, session=session)
        translator = TranslateClient(config.translation, session=session) if config.translation_enabled else None
        return cls(glossary, translator)

    @property
    def glossary(self) -> Mapping[str, str]:
        return self._glossary

    def resolve_local(self, names: Sequence[str]) -> list[str]:
        return [self._glossary.get(name, name) for name in names]

    def missing_names(self, names: Sequence[str]) -> list[str]:
        """Names without a glossary entry, in first-seen order without repeats."""
        out: list[str] = []
        for name in names:
            if name not in self._glossary and name not in out:
                out.append(name)
        return out

    def resolve_remote(self, names: Sequence[str]) -> list[str]:
        """Translate names with the remote capability.

        Raises:
            RemoteTranslationFailed: upstream error response, or a response whose
                length differs from the request
            RemoteTranslationUnavailable: no translator configured, or a
                transport/auth/timeout failure
        """
        if not names:
            return []
        if self._translator is None:
            raise RemoteTranslationUnavailable("no remote translator configured")
        try:
            translated = self._translator.translate(list(names))
        except TranslationError:
            raise
        except (requests.RequestException, OSError) as e:
            raise RemoteTranslationUnavailable(f"translate call failed: {e}") from e
        if len(translated) != len(names):
            raise RemoteTranslationFailed(
                f"expected {len(names)} translations, got {len(translated)}"
            )
        return translated

    def resolve(self, names: Sequence[str], use_remote: bool = False) -> list[str]:
        """Local resolution; with use_remote, glossary misses go to the remote service."""
        resolved = self.resolve_local(names)
        if not use_remote:
            return resolved
        missing = self.missing_names(names)
        if not missing:
            return resolved
        logger.info(f"remote translation for {len(missing)} glossary miss(es)")
        remote = dict(zip(missing, self.resolve_remote(missing), strict=True))
        return [remote.get(name, r) for name, r in zip(names, resolved, strict=True)]
