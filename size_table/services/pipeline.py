from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ..models.codes import ItemCode, SizeCode
from ..models.item_record import ItemRecord
from ..models.item_table import ItemMeta, ItemTable
from ..models.row import Row, cell_text
from ..parsers.measurement_grammar import parse_measurements
from .classifier import ColumnIndices, ColumnRole, classify_columns
from .errors import MeasurementLayoutMismatch, RowError, SizeTableError
from .grouper import DuplicatePolicy, group_numbered_rows
from .resolver import NameResolver

if TYPE_CHECKING:
    from ..config.loader import AppConfig
    from .progress import ProgressTracker

"""Row-to-table pipeline.

classify columns -> group rows -> parse each row into an ItemRecord -> check
that every row of a group has the first row's measurement names -> resolve the
first row's names -> one ItemTable per group.

Fail-fast: the first error aborts the run and nothing is returned. Row-level
errors are wrapped in RowError with the 1-based sheet row number
(header = row 1, first data row = row 2).
"""

__all__ = [
    "DEFAULT_SIZE_LABEL_HEADER",
    "TablePipeline",
]

logger = logging.getLogger(__name__)

DEFAULT_SIZE_LABEL_HEADER = "尺码"
FIRST_DATA_ROW = 2


class TablePipeline:
    def __init__(
        self,
        resolver: NameResolver,
        *,
        size_label_header: str = DEFAULT_SIZE_LABEL_HEADER,
        on_duplicate: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST,
        column_labels: Mapping[ColumnRole, frozenset[str]] | None = None,
        use_remote: bool = False,
    ) -> None:
        self.resolver = resolver
        self.size_label_header = size_label_header
        self.on_duplicate = on_duplicate
        self.column_labels = column_labels
        self.use_remote = use_remote

    @classmethod
    def from_config(cls, config: AppConfig, resolver: NameResolver) -> TablePipeline:
        return cls(
            resolver,
            size_label_header=config.size_label_header,
            on_duplicate=DuplicatePolicy(config.on_duplicate),
            column_labels=config.column_labels,
            use_remote=config.translation_enabled,
        )

    def build_tables(self, header_row: Sequence[Any], data_rows: Sequence[Row]) -> list[ItemTable]:
        return [meta.table for meta in self.build_item_meta(header_row, data_rows)]

    def build_item_meta(
        self,
        header_row: Sequence[Any],
        data_rows: Sequence[Row],
        row_numbers: Sequence[int] | None = None,
        progress: ProgressTracker | None = None,
    ) -> list[ItemMeta]:
        """Build one ItemMeta per item code, in lexical item-code order.

        row_numbers gives the sheet row of each data row (defaults to 2, 3, ...).

        Raises:
            SizeTableError: first failure encountered (no partial results)
        """
        cols = classify_columns(header_row, self.column_labels)
        if row_numbers is None:
            row_numbers = range(FIRST_DATA_ROW, FIRST_DATA_ROW + len(data_rows))
        numbered = list(zip(row_numbers, data_rows, strict=True))
        groups = group_numbered_rows(numbered, cols, self.on_duplicate)
        logger.debug(f"{len(data_rows)} data rows -> {len(groups)} item group(s)")

        records_by_group = [
            [self._build_record(row, cols, n) for n, row in group]
            for group in groups
        ]
        for records in records_by_group:
            _check_layout(records)

        if progress is not None:
            progress.set_total(len(records_by_group))
        metas: list[ItemMeta] = []
        for records in records_by_group:
            if progress is not None:
                progress.start_item(str(records[0].item_code))
            metas.append(self._assemble(records))
            if progress is not None:
                progress.finish_item()
        return metas

    def _build_record(self, row: Row, cols: ColumnIndices, row_number: int) -> ItemRecord:
        try:
            item_code = ItemCode.parse(cell_text(row, cols.item_code).replace(" ", "_"))
            size_code = SizeCode.parse(cell_text(row, cols.size_code))
            measurements = parse_measurements(cell_text(row, cols.text))
        except SizeTableError as e:
            raise RowError(row_number, e) from e
        return ItemRecord(item_code, size_code, measurements, row_number)

    def _assemble(self, records: list[ItemRecord]) -> ItemMeta:
        first = records[0]
        names = first.measurements.names()
        resolved = self.resolver.resolve(names, use_remote=self.use_remote)
        table = ItemTable(
            header=[self.size_label_header, *resolved],
            rows=[[r.size_code.to_ordinal_label(), *r.measurements.values()] for r in records],
        )
        return ItemMeta(code=str(first.item_code), size_code=str(first.size_code), table=table)


def _check_layout(records: list[ItemRecord]) -> None:
    """Every record must carry the first record's names in the same order."""
    expected = records[0].measurements.names()
    for record in records[1:]:
        actual = record.measurements.names()
        if actual != expected:
            raise RowError(
                record.row_number,
                MeasurementLayoutMismatch(str(record.item_code), expected, actual),
            )
