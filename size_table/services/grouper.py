from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from ..models.row import Row, cell_text
from .classifier import ColumnIndices
from .errors import DuplicateRowError, EmptySheet

"""Row grouping by item code.

1. Deduplicate on (item code text, size code text); the first occurrence wins,
   or DuplicateRowError is raised under DuplicatePolicy.ERROR.
2. Stable sort by item code text (lexical, not numeric).
3. Split into contiguous groups where the item code changes.

Within a group rows keep their input order (stable sort).
"""

__all__ = [
    "DuplicatePolicy",
    "group_rows",
    "group_numbered_rows",
    "NumberedRow",
]

logger = logging.getLogger(__name__)


class DuplicatePolicy(Enum):
    KEEP_FIRST = "keep-first"
    ERROR = "error"


NumberedRow = tuple[int, Row]


def _dedupe(numbered: Sequence[NumberedRow], cols: ColumnIndices, on_duplicate: DuplicatePolicy) -> list[NumberedRow]:
    seen: set[tuple[str, str]] = set()
    unique: list[NumberedRow] = []
    for n, row in numbered:
        key = (cell_text(row, cols.item_code), cell_text(row, cols.size_code))
        if key in seen:
            if on_duplicate is DuplicatePolicy.ERROR:
                raise DuplicateRowError(*key)
            logger.debug("duplicate row %d dropped: item=%s size=%s", n, *key)
            continue
        seen.add(key)
        unique.append((n, row))
    return unique


def group_numbered_rows(
    numbered: Sequence[NumberedRow],
    cols: ColumnIndices,
    on_duplicate: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST,
) -> list[list[NumberedRow]]:
    """Group (sheet row number, row) pairs into per-item lists in lexical item-code order.

    Raises:
        EmptySheet: no data rows
        DuplicateRowError: duplicate (item, size) pair under DuplicatePolicy.ERROR
    """
    if not numbered:
        raise EmptySheet()

    unique = _dedupe(numbered, cols, on_duplicate)
    dropped = len(numbered) - len(unique)
    if dropped:
        logger.info(f"dropped {dropped} duplicate row(s)")

    ordered = sorted(unique, key=lambda pair: cell_text(pair[1], cols.item_code))

    groups: list[list[NumberedRow]] = []
    current_code: str | None = None
    for n, row in ordered:
        code = cell_text(row, cols.item_code)
        if not groups or code != current_code:
            groups.append([])
            current_code = code
        groups[-1].append((n, row))
    return groups


def group_rows(
    data_rows: Sequence[Row],
    cols: ColumnIndices,
    on_duplicate: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST,
) -> list[list[Row]]:
    """Same as group_numbered_rows for rows without sheet row numbers."""
    numbered = list(enumerate(data_rows))
    return [[row for _, row in group] for group in group_numbered_rows(numbered, cols, on_duplicate)]
