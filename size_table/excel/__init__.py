"""Spreadsheet decoding."""
