from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Output models handed to the display layer.

ItemTable holds only strings so it stays valid after the pipeline's internal
records are dropped. ItemMeta adds the item code / size code the table was
built for.
"""

__all__ = [
    "ItemTable",
    "ItemMeta",
]


@dataclass(frozen=True)
class ItemTable:
    header: list[str]
    rows: list[list[str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"head": list(self.header), "body": [list(r) for r in self.rows]}


@dataclass(frozen=True)
class ItemMeta:
    code: str  # item code text
    size_code: str  # size code of the group's first record
    table: ItemTable

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "size_code": self.size_code, "table": self.table.to_dict()}
