from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

Shows item-group progress while tables are assembled. In non-TTY
environments (CI, piped output) the bar is disabled so JSON written to stdout
stays clean.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stderr.isatty()


class ProgressTracker:
    """Progress bar over item groups."""

    def __init__(self, total_items: int | None = None, *, description: str = "Building tables") -> None:
        self.total_items = total_items
        self.description = description
        self.current_item = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_items,
                desc=description,
                unit="item",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
                file=sys.stderr,
            )
        else:
            self.pbar = None

    def set_total(self, total_items: int) -> None:
        self.total_items = total_items
        if self.pbar is not None:
            self.pbar.total = total_items
            self.pbar.refresh()

    def start_item(self, item_code: str) -> None:
        self.current_item += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({item_code})")

    def finish_item(self) -> None:
        if self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
