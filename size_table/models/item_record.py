from __future__ import annotations

from dataclasses import dataclass

from .codes import ItemCode, SizeCode
from .measurement import MeasurementSet

"""ItemRecord model: one parsed spreadsheet row."""

__all__ = [
    "ItemRecord",
]


@dataclass(frozen=True)
class ItemRecord:
    """A validated row: item code, size code and its measurements.

    row_number is the 1-based sheet row (header = row 1), kept for error reporting.
    """
    item_code: ItemCode
    size_code: SizeCode
    measurements: MeasurementSet
    row_number: int = -1  # 不明な場合 -1
