from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

"""Raw spreadsheet row helpers.

A Row is the decoder's ordered cell sequence; the pipeline only reads cells
by index and always through ``cell_text``.
"""

__all__ = [
    "Row",
    "cell_text",
]

Row = Sequence[Any]


def cell_text(row: Row, index: int) -> str:
    """Text of a cell. Missing/None/NaN cells are "", integral floats drop ``.0``."""
    if index >= len(row):
        return ""
    val = row[index]
    if val is None:
        return ""
    if isinstance(val, float):
        if math.isnan(val):
            return ""
        if val.is_integer():
            return str(int(val))
    return str(val)
