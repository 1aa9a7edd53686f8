"""Exceptions raised by acrofill."""

from __future__ import annotations


class AcroFillError(Exception):
    """Base exception for acrofill errors."""
    pass


class FormAbsentError(AcroFillError):
    """The document has no interactive form root."""
    pass


class UnsupportedFieldKindError(AcroFillError):
    """A field kind reached a code path that does not handle it."""
    pass


class BarcodeError(AcroFillError):
    """A barcode could not be built for a field value."""

    def __init__(self, symbology: str, reason: str = "barcode error"):
        super().__init__(f"{reason}: {symbology}")
        self.symbology = symbology


class UnknownSymbologyError(BarcodeError):
    """The barcode provider does not know the requested symbology."""

    def __init__(self, symbology: str, reason: str = "unknown barcode symbology"):
        super().__init__(symbology, reason)


class InvalidBarcodeError(BarcodeError):
    """The payload cannot be encoded in the requested symbology."""

    def __init__(self, symbology: str, payload: str, reason: str = "cannot encode payload"):
        super().__init__(symbology, f"{reason} {payload!r} as")
        self.payload = payload


class ExpressionError(AcroFillError):
    """An expression could not be evaluated against its context."""
    pass


__all__ = [
    "AcroFillError",
    "BarcodeError",
    "ExpressionError",
    "FormAbsentError",
    "InvalidBarcodeError",
    "UnknownSymbologyError",
    "UnsupportedFieldKindError",
]
