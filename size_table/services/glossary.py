from __future__ import annotations

import io
import logging
from pathlib import Path

import pandas as pd
import requests

"""Glossary loading.

The glossary is a CSV whose first row is a header and whose first two columns
are (source label, target label). It is read from a local path when one is
given and exists, otherwise fetched from a URL. An absent or unreachable
source yields an empty glossary; later rows override earlier duplicates.
"""

__all__ = [
    "load_glossary",
    "parse_glossary_csv",
    "fetch_glossary_text",
]

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0


def parse_glossary_csv(text: str) -> dict[str, str]:
    if not text.strip():
        return {}
    df = pd.read_csv(io.StringIO(text), header=0, dtype=str, keep_default_na=False)
    if df.shape[1] < 2:
        raise ValueError(f"glossary needs 2 columns, got {df.shape[1]}")
    glossary: dict[str, str] = {}
    for source, target in zip(df.iloc[:, 0].tolist(), df.iloc[:, 1].tolist(), strict=True):
        source = source.strip()
        target = target.strip()
        if source and target:
            glossary[source] = target
    return glossary


def fetch_glossary_text(url: str, session: requests.Session | None = None, timeout: float = DEFAULT_FETCH_TIMEOUT) -> str:
    http = session or requests.Session()
    resp = http.get(url, timeout=timeout)
    resp.raise_for_status()
    # requests assumes ISO-8859-1 for text/* without a charset; the glossary is UTF-8
    if "charset=" not in resp.headers.get("Content-Type", "").lower():
        return resp.content.decode("utf-8-sig")
    return resp.text


def load_glossary(
    path: Path | None = None,
    url: str | None = None,
    session: requests.Session | None = None,
) -> dict[str, str]:
    """Load the glossary once; a missing, unreachable or undecodable source yields {}."""
    text: str | None = None
    if path is not None and path.exists():
        logger.info(f"glossary: using local file {path}")
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"glossary file unreadable, using empty glossary: {e}")
            return {}
    elif url:
        logger.info(f"glossary: downloading from {url}")
        try:
            text = fetch_glossary_text(url, session=session)
        except (requests.RequestException, UnicodeDecodeError) as e:
            logger.warning(f"glossary download failed, using empty glossary: {e}")
            return {}
    else:
        if path is not None:
            logger.warning(f"glossary file not found: {path}")
        logger.info("glossary: no source configured, using empty glossary")
        return {}

    try:
        glossary = parse_glossary_csv(text)
    except (ValueError, pd.errors.ParserError) as e:
        logger.warning(f"glossary unreadable, using empty glossary: {e}")
        return {}
    logger.info(f"glossary: {len(glossary)} entries")
    return glossary
