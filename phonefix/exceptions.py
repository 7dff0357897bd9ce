"""Errors raised by the spreadsheet conversion layer."""

from __future__ import annotations


class PhoneFixError(RuntimeError):
    """Base class for file-level conversion failures."""


class InvalidFileError(PhoneFixError):
    """Input file failed validation (missing, wrong extension, empty...)."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid file")


class SpreadsheetReadError(PhoneFixError):
    """Spreadsheet could not be read or has no usable content."""
