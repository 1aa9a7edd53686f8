"""Barcode symbols backed by ``reportlab.graphics.barcode``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Protocol

from reportlab.graphics import renderPDF
from reportlab.graphics.barcode import createBarcodeDrawing
from reportlab.graphics.shapes import Drawing

from .errors import InvalidBarcodeError, UnknownSymbologyError

_LINEAR = {"humanReadable": False, "quiet": 0}

# symbology token -> (reportlab code name, extra widget options)
SYMBOLOGIES: Mapping[str, tuple] = {
    "code39": ("Standard39", dict(_LINEAR, checksum=0)),
    "code39ext": ("Extended39", dict(_LINEAR, checksum=0)),
    "code93": ("Standard93", dict(_LINEAR)),
    "code128": ("Code128", dict(_LINEAR)),
    "ean13": ("EAN13", dict(_LINEAR)),
    "ean8": ("EAN8", dict(_LINEAR)),
    "upca": ("UPCA", dict(_LINEAR)),
    "i2of5": ("I2of5", dict(_LINEAR, checksum=0)),
    "qr": ("QR", {}),
}

# Width of one barcode module, in points, at an xdim of 1.
BASE_MODULE_WIDTH = 1.0

# Bar height used when checking that a payload can be encoded.
_PROBE_HEIGHT = 10.0


@dataclass(frozen=True)
class BarcodeSymbol:
    """A barcode ready to be rendered at a given module width and height."""

    symbology: str
    payload: str
    code_name: str
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_matrix(self) -> bool:
        return self.code_name == "QR"

    def drawing(self, xdim: float, height: float) -> Drawing:
        if self.is_matrix:
            size = height * xdim
            return createBarcodeDrawing(self.code_name, value=self.payload, barWidth=size, barHeight=size)
        return createBarcodeDrawing(
            self.code_name,
            value=self.payload,
            barWidth=BASE_MODULE_WIDTH * xdim,
            barHeight=height,
            **self.options,
        )

    def to_pdf(self, xdim: float, height: float) -> bytes:
        """Render the symbol as a one-page PDF sized to the barcode."""

        return renderPDF.drawToString(self.drawing(xdim, height))


class BarcodeProvider(Protocol):
    def create(self, symbology: str, payload: str) -> Any: ...


class ReportlabBarcodeProvider:
    """Build :class:`BarcodeSymbol` objects for the supported symbologies."""

    def __init__(self, symbologies: Mapping[str, tuple] = SYMBOLOGIES) -> None:
        self._symbologies = dict(symbologies)

    def create(self, symbology: str, payload: str) -> BarcodeSymbol:
        key = symbology.lower()
        try:
            code_name, options = self._symbologies[key]
        except KeyError:
            raise UnknownSymbologyError(key) from None
        symbol = BarcodeSymbol(symbology=key, payload=payload, code_name=code_name, options=dict(options))
        try:
            symbol.drawing(1.0, _PROBE_HEIGHT)
        except Exception as exc:  # reportlab validators raise AttributeError, ValueError and others
            raise InvalidBarcodeError(key, payload) from exc
        return symbol


__all__ = ["BASE_MODULE_WIDTH", "BarcodeProvider", "BarcodeSymbol", "ReportlabBarcodeProvider", "SYMBOLOGIES"]
