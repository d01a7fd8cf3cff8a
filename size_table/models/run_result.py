from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Run result model used for the SUMMARY output line."""

__all__ = [
    "RunResult",
]


@dataclass(frozen=True)
class RunResult:
    """Aggregated outcome of one workbook run."""
    file_name: str
    item_count: int  # ItemTable 数
    row_count: int  # テーブル本体の行数合計
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float

    @staticmethod
    def from_times(file_name: str, item_count: int, row_count: int, start_time: datetime, end_time: datetime) -> RunResult:
        return RunResult(
            file_name=file_name,
            item_count=item_count,
            row_count=row_count,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
        )
