from __future__ import annotations

"""Error taxonomy for the size table pipeline.

Every failure is raised as a subclass of ``SizeTableError`` and carries enough
context (offending cell text, row number, upstream message) for a display
layer to render a specific message. ``user_message()`` returns the short
Chinese text shown to operators.
"""

__all__ = [
    "SizeTableError",
    "MeasurementError",
    "EmptyMeasurementText",
    "InvalidMeasurementToken",
    "SchemaError",
    "MissingOrAmbiguousColumns",
    "EmptySheet",
    "DuplicateRowError",
    "CodeParseError",
    "InvalidItemCode",
    "InvalidSizeCode",
    "MeasurementLayoutMismatch",
    "RowError",
    "TranslationError",
    "RemoteTranslationFailed",
    "RemoteTranslationUnavailable",
]


class SizeTableError(Exception):
    """Base exception for size table processing."""

    error_type = "SIZE_TABLE_ERROR"

    def user_message(self) -> str:
        return str(self)


class MeasurementError(SizeTableError):
    """Raised when a measurement text cell cannot be parsed."""


class EmptyMeasurementText(MeasurementError):
    error_type = "EMPTY_MEASUREMENT_TEXT"

    def __init__(self) -> None:
        super().__init__("measurement text is empty")

    def user_message(self) -> str:
        return "[採寸]列不能是空栏"


class InvalidMeasurementToken(MeasurementError):
    error_type = "INVALID_MEASUREMENT_TOKEN"

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"invalid measurement token: {token!r}")

    def user_message(self) -> str:
        return f"採寸格式错误:{self.token}"


class SchemaError(SizeTableError):
    """Raised when the sheet layout does not match the expected columns."""


class MissingOrAmbiguousColumns(SchemaError):
    error_type = "MISSING_OR_AMBIGUOUS_COLUMNS"

    def __init__(self, missing: list[str], duplicated: list[str]) -> None:
        self.missing = missing
        self.duplicated = duplicated
        parts = []
        if missing:
            parts.append(f"missing={missing}")
        if duplicated:
            parts.append(f"duplicated={duplicated}")
        super().__init__("header columns not resolvable: " + " ".join(parts))

    def user_message(self) -> str:
        return "请确认Excel文件有[品番][採寸]和[SZ]列"


class EmptySheet(SizeTableError):
    error_type = "EMPTY_SHEET"

    def __init__(self, message: str = "sheet has no data rows") -> None:
        super().__init__(message)

    def user_message(self) -> str:
        return "文件是空文件"


class DuplicateRowError(SizeTableError):
    error_type = "DUPLICATE_ROW"

    def __init__(self, item_code: str, size_code: str) -> None:
        self.item_code = item_code
        self.size_code = size_code
        super().__init__(f"duplicate row for item={item_code!r} size={size_code!r}")

    def user_message(self) -> str:
        return f"品番[{self.item_code}] SZ[{self.size_code}]重复"


class CodeParseError(SizeTableError):
    """Raised by the item/size code value types."""

    label = "code"

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"{self.label} format error: {text!r}")


class InvalidItemCode(CodeParseError):
    error_type = "INVALID_ITEM_CODE"
    label = "item code"

    def user_message(self) -> str:
        return "品番格式错误"


class InvalidSizeCode(CodeParseError):
    error_type = "INVALID_SIZE_CODE"
    label = "size code"

    def user_message(self) -> str:
        return "SZ格式错误"


class MeasurementLayoutMismatch(SizeTableError):
    """A row's measurement names differ from the first row of its item group."""

    error_type = "MEASUREMENT_LAYOUT_MISMATCH"

    def __init__(self, item_code: str, expected: list[str], actual: list[str]) -> None:
        self.item_code = item_code
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"measurement names for item {item_code!r} differ from first row: "
            f"expected={expected} actual={actual}"
        )

    def user_message(self) -> str:
        return f"品番[{self.item_code}]的採寸项目与第一行不一致"


class RowError(SizeTableError):
    """Wraps a row-level failure with the sheet row number it came from."""

    def __init__(self, row_number: int, cause: SizeTableError) -> None:
        self.row_number = row_number
        self.cause = cause
        super().__init__(f"row {row_number}: {cause}")

    @property
    def error_type(self) -> str:  # type: ignore[override]
        return self.cause.error_type

    def user_message(self) -> str:
        return f"第{self.row_number}行 {self.cause.user_message()}"


class TranslationError(SizeTableError):
    """Raised by remote name resolution only."""


class RemoteTranslationFailed(TranslationError):
    error_type = "REMOTE_TRANSLATION_FAILED"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"translate got error response: {message}")

    def user_message(self) -> str:
        return f"翻译失败:{self.message}"


class RemoteTranslationUnavailable(TranslationError):
    error_type = "REMOTE_TRANSLATION_UNAVAILABLE"

    def __init__(self, reason: str = "translation service unavailable") -> None:
        super().__init__(reason)

    def user_message(self) -> str:
        return "翻译服务不可用"
