from __future__ import annotations

from ..models.run_result import RunResult

"""SUMMARY line rendering.

Format::

    SUMMARY file={name} items={items} rows={rows} elapsed_sec={elapsed}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: RunResult) -> str:
    """Render a SUMMARY line from a RunResult.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> render_summary_line(RunResult.from_times("sizes.xlsx", 3, 9, start, end))
        'SUMMARY file=sizes.xlsx items=3 rows=9 elapsed_sec=2'
    """
    return (
        f"SUMMARY file={result.file_name} "
        f"items={result.item_count} "
        f"rows={result.row_count} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
