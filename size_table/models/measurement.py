from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

"""Measurement value objects.

A measurement cell such as ``肩宽:42.5 胸围:104`` becomes a MeasurementSet of
MeasurementPair entries, kept in the order they appear in the cell.
"""

__all__ = [
    "MeasurementPair",
    "MeasurementSet",
]


@dataclass(frozen=True)
class MeasurementPair:
    """One ``name:value`` entry. Both parts are non-empty."""
    name: str
    value: str

    def __post_init__(self) -> None:
        if not self.name or not self.value:
            raise ValueError(f"measurement name/value must be non-empty: {self.name!r}:{self.value!r}")

    def to_token(self) -> str:
        return f"{self.name}:{self.value}"


@dataclass(frozen=True)
class MeasurementSet:
    """Ordered, non-empty sequence of MeasurementPair (duplicate names allowed)."""
    pairs: tuple[MeasurementPair, ...]

    def __post_init__(self) -> None:
        if not self.pairs:
            raise ValueError("measurement set must contain at least one pair")

    @classmethod
    def of(cls, pairs: Sequence[MeasurementPair]) -> MeasurementSet:
        return cls(tuple(pairs))

    def names(self) -> list[str]:
        return [p.name for p in self.pairs]

    def values(self) -> list[str]:
        return [p.value for p in self.pairs]

    def __iter__(self) -> Iterator[MeasurementPair]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)
