from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row import cell_text
from ..services.errors import EmptySheet, SizeTableError

"""Excel reader.

Reads the first worksheet of an ``.xlsx`` workbook. Row 1 is the header, the
remaining rows are data. Cells keep pandas' native values (str / int / float /
NaN); the pipeline converts them with ``cell_text``. Rows whose cells are all
empty are dropped.
"""

__all__ = [
    "SheetReadError",
    "SheetRows",
    "read_excel_file",
]

logger = logging.getLogger(__name__)


class SheetReadError(SizeTableError):
    """Raised when the workbook cannot be opened or decoded."""

    error_type = "EXCEL_READ"

    def user_message(self) -> str:
        return "请选择需要打开的Excel文件"


@dataclass
class SheetRows:
    sheet_name: str
    header: list[Any]
    rows: list[list[Any]]  # データ行 (全空行は除外済)
    row_numbers: list[int]  # 各データ行の元シート行番号 (1-based)


def _is_blank_row(values: list[Any]) -> bool:
    return all(cell_text(values, i).strip() == "" for i in range(len(values)))


def read_excel_file(path: Path) -> SheetRows:
    """Read the first sheet of an Excel workbook.

    Raises:
        SheetReadError: the file is missing or not a readable workbook
        EmptySheet: the first sheet has no rows at all
    """
    if not path.exists():
        raise SheetReadError(f"excel file not found: {path}")
    try:
        with pd.ExcelFile(path) as xls:
            if not xls.sheet_names:
                raise EmptySheet(f"workbook has no sheets: {path.name}")
            name = str(xls.sheet_names[0])
            # ヘッダなしで生読み (1行目をヘッダとして扱う)
            df = xls.parse(xls.sheet_names[0], header=None, keep_default_na=False, na_values=[""])
    except (ValueError, OSError, zipfile.BadZipFile) as e:
        raise SheetReadError(f"failed to read {path.name}: {e}") from e

    if df.shape[0] < 1:
        raise EmptySheet(f"sheet '{name}' is empty")

    header = df.iloc[0].tolist()
    rows: list[list[Any]] = []
    row_numbers: list[int] = []
    for offset, raw in enumerate(df.iloc[1:].itertuples(index=False, name=None)):
        values = list(raw)
        if _is_blank_row(values):
            continue
        rows.append(values)
        row_numbers.append(offset + 2)
    logger.debug(f"read sheet '{name}': {len(rows)} data row(s)")
    return SheetRows(sheet_name=name, header=header, rows=rows, row_numbers=row_numbers)
