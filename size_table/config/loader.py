from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..services.classifier import DEFAULT_COLUMN_LABELS, ColumnRole
from ..services.translate_client import TranslateConfig

"""Config loader.

Responsibilities:
- Load YAML config (default: config/size_table.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for every omitted key
"""

__all__ = [
    "ConfigError",
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "default_config",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/size_table.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class AppConfig:
    size_label_header: str = "尺码"
    on_duplicate: str = "keep-first"  # keep-first | error
    column_labels: dict[ColumnRole, frozenset[str]] = field(default_factory=lambda: dict(DEFAULT_COLUMN_LABELS))
    glossary_path: str | None = None
    glossary_url: str | None = None
    translation_enabled: bool = False
    translation: TranslateConfig = field(default_factory=TranslateConfig)


def default_config() -> AppConfig:
    return AppConfig()


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or the data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _column_labels(raw: dict[str, list[str]]) -> dict[ColumnRole, frozenset[str]]:
    labels = dict(DEFAULT_COLUMN_LABELS)
    for role in ColumnRole:
        if role.value in raw:
            labels[role] = frozenset(s.strip() for s in raw[role.value])
    return labels


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = TranslateConfig()
    tr_raw = data.get("translation", {})
    translation = TranslateConfig(
        endpoint=tr_raw.get("endpoint", defaults.endpoint),
        source_language=tr_raw.get("source_language", defaults.source_language),
        target_language=tr_raw.get("target_language", defaults.target_language),
        glossary=tr_raw.get("glossary", defaults.glossary),
        timeout=float(tr_raw.get("timeout", defaults.timeout)),
    )
    gl_raw = data.get("glossary", {})
    return AppConfig(
        size_label_header=data.get("size_label_header", "尺码"),
        on_duplicate=data.get("on_duplicate", "keep-first"),
        column_labels=_column_labels(data.get("columns", {})),
        glossary_path=gl_raw.get("path"),
        glossary_url=gl_raw.get("url"),
        translation_enabled=bool(tr_raw.get("enabled", False)),
        translation=translation,
    )
