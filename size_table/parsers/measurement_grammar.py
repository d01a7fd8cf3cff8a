from __future__ import annotations

import logging

from ..models.measurement import MeasurementPair, MeasurementSet
from ..services.errors import EmptyMeasurementText, InvalidMeasurementToken

"""Grammar for free-text measurement cells.

Input example (採寸 column)::

    肩宽:42.5 袖丈：62　胸囲: 104

Normalization rewrites the full-width colon to ``:``, drops the single space
after a colon and rewrites the full-width space to a plain space. The text is
then split on whitespace runs; every token must be ``name:value`` with exactly
one colon and both sides non-empty.
"""

__all__ = [
    "normalize_measurement_text",
    "parse_measurement_token",
    "parse_measurements",
    "format_measurements",
]

logger = logging.getLogger(__name__)

FULLWIDTH_COLON = "："
FULLWIDTH_SPACE = "　"


def normalize_measurement_text(text: str) -> str:
    # 順序固定: 全角コロン -> ": " -> 全角スペース
    return (
        text.replace(FULLWIDTH_COLON, ":")
        .replace(": ", ":")
        .replace(FULLWIDTH_SPACE, " ")
    )


def parse_measurement_token(token: str) -> MeasurementPair:
    if token.count(":") != 1:
        logger.debug("measurement token rejected (colon count): %r", token)
        raise InvalidMeasurementToken(token)
    name, value = token.split(":")
    if not name or not value:
        logger.debug("measurement token rejected (empty side): %r", token)
        raise InvalidMeasurementToken(token)
    return MeasurementPair(name=name, value=value)


def parse_measurements(text: str) -> MeasurementSet:
    """Parse one measurement cell into an ordered MeasurementSet.

    Raises:
        EmptyMeasurementText: empty or whitespace-only input
        InvalidMeasurementToken: a token without exactly one colon, or with an
            empty name/value
    """
    if not text:
        raise EmptyMeasurementText()
    tokens = normalize_measurement_text(text).split()
    if not tokens:
        raise EmptyMeasurementText()
    return MeasurementSet.of([parse_measurement_token(t) for t in tokens])


def format_measurements(measurements: MeasurementSet) -> str:
    """Render ``name:value`` tokens joined by single spaces (parses back to an equal set)."""
    return " ".join(p.to_token() for p in measurements)
