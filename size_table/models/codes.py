from __future__ import annotations

import re
from dataclasses import dataclass

from ..services.errors import InvalidItemCode, InvalidSizeCode

"""Item code / size code value types.

ItemCode: product number text (``A001``, ``24SS_0101``). Letters, digits and
``_ - . /`` only; callers replace inner spaces with ``_`` before parsing.

SizeCode: either a numeric size (``1``, ``02``) or a letter size from
SIZE_ORDER. ``to_ordinal_label`` renders the size position as a roman numeral
(``S`` -> ``II``, ``3`` -> ``III``), which is what the size table displays.
"""

__all__ = [
    "ItemCode",
    "SizeCode",
    "SIZE_ORDER",
    "to_roman_numeral",
]

SIZE_ORDER = ["XS", "S", "M", "L", "XL", "XXL", "3XL", "4XL"]
SIZE_ALIASES = {"2XL": "XXL", "LL": "XL", "3L": "XXL", "SS": "XS"}

_ITEM_CODE_RE = re.compile(r"^[0-9A-Za-z][0-9A-Za-z_\-./]*$")

_ROMAN = [
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
]


def to_roman_numeral(n: int) -> str:
    if not 0 < n < 4000:
        raise ValueError(f"roman numeral out of range: {n}")
    out = []
    for value, symbol in _ROMAN:
        count, n = divmod(n, value)
        out.append(symbol * count)
    return "".join(out)


@dataclass(frozen=True)
class ItemCode:
    code: str

    @classmethod
    def parse(cls, text: str) -> ItemCode:
        stripped = text.strip()
        if not _ITEM_CODE_RE.match(stripped):
            raise InvalidItemCode(text)
        return cls(stripped)

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class SizeCode:
    code: str  # canonical text (letter size upper-cased, numeric as written)
    ordinal: int  # 1-based position

    @classmethod
    def parse(cls, text: str) -> SizeCode:
        stripped = text.strip()
        if stripped.isdigit():
            ordinal = int(stripped)
            if not 0 < ordinal < 4000:
                raise InvalidSizeCode(text)
            return cls(stripped, ordinal)
        upper = SIZE_ALIASES.get(stripped.upper(), stripped.upper())
        if upper not in SIZE_ORDER:
            raise InvalidSizeCode(text)
        return cls(upper, SIZE_ORDER.index(upper) + 1)

    def to_ordinal_label(self) -> str:
        return to_roman_numeral(self.ordinal)

    def __str__(self) -> str:
        return self.code
