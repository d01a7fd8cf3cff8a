"""Size table generator: garment measurement spreadsheets -> per-item size tables."""

__version__ = "0.1.0"
