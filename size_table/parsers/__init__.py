"""Text parsers for spreadsheet cells."""

from .measurement_grammar import format_measurements, normalize_measurement_text, parse_measurements

__all__ = [
    "normalize_measurement_text",
    "parse_measurements",
    "format_measurements",
]
