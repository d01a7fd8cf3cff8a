from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import MissingOrAmbiguousColumns

"""Header row classification.

Maps header cells to the three semantic column roles the pipeline reads. A
cell matches a role when its trimmed text equals one of the role's labels.
Columns matching no role are ignored.
"""

__all__ = [
    "ColumnRole",
    "ColumnIndices",
    "DEFAULT_COLUMN_LABELS",
    "classify_columns",
]

logger = logging.getLogger(__name__)


class ColumnRole(Enum):
    """Semantic role of a spreadsheet column."""
    ITEM_CODE = "item_code"
    SIZE_CODE = "size_code"
    MEASUREMENT_TEXT = "measurement_text"


DEFAULT_COLUMN_LABELS: dict[ColumnRole, frozenset[str]] = {
    ColumnRole.ITEM_CODE: frozenset({"品番"}),
    ColumnRole.SIZE_CODE: frozenset({"SZ"}),
    ColumnRole.MEASUREMENT_TEXT: frozenset({"採寸"}),
}


@dataclass(frozen=True)
class ColumnIndices:
    item_code: int
    size_code: int
    text: int


def classify_columns(
    header_row: Sequence[Any],
    labels: Mapping[ColumnRole, frozenset[str]] | None = None,
) -> ColumnIndices:
    """Locate item code / size code / measurement text columns.

    Returns indices in semantic order regardless of header position.

    Raises:
        MissingOrAmbiguousColumns: a role matched zero times or more than once
    """
    role_labels = dict(DEFAULT_COLUMN_LABELS)
    if labels:
        role_labels.update(labels)

    hits: dict[ColumnRole, list[int]] = {role: [] for role in ColumnRole}
    for i, cell in enumerate(header_row):
        text = "" if cell is None else str(cell).strip()
        for role, accepted in role_labels.items():
            if text in accepted:
                hits[role].append(i)

    missing = [role.value for role, idx in hits.items() if not idx]
    duplicated = [role.value for role, idx in hits.items() if len(idx) > 1]
    if missing or duplicated:
        raise MissingOrAmbiguousColumns(missing, duplicated)

    cols = ColumnIndices(
        item_code=hits[ColumnRole.ITEM_CODE][0],
        size_code=hits[ColumnRole.SIZE_CODE][0],
        text=hits[ColumnRole.MEASUREMENT_TEXT][0],
    )
    logger.debug("columns classified: %s", cols)
    return cols
