"""Data models for acrofill."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union


class FieldKind(str, Enum):
    """Enumeration of supported AcroForm field kinds."""

    TEXT = "text"
    CHECKBOX = "checkbox"


class FontStyle(str, Enum):
    NORMAL = "normal"
    ITALIC = "italic"
    BOLD = "bold"
    BOLD_ITALIC = "bold_italic"


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class ValueKind(str, Enum):
    PLAIN = "plain"
    BARCODE = "barcode"
    LABEL = "label"


class Rotation(int, Enum):
    """Barcode rotation in degrees, counter-clockwise."""

    NONE = 0
    LEFT = 90
    RIGHT = 270


class Overflow(str, Enum):
    EXPAND = "expand"
    SHRINK_TO_FIT = "shrink_to_fit"
    NONE = "none"


Box = Tuple[float, float, float, float]


@dataclass(frozen=True)
class FieldRefs:
    """Back references into the object graph, only used for cleanup."""

    page: Any
    field: Any
    container: Any


@dataclass(frozen=True)
class FieldSpec:
    """One supported widget of the interactive form."""

    name: str
    kind: FieldKind
    box: Box
    page_number: int
    refs: Optional[FieldRefs] = None
    default_value: str = ""
    font: Optional[str] = None
    font_style: Optional[FontStyle] = None
    font_size: Optional[float] = None
    align: Optional[TextAlign] = None
    checked: bool = False


@dataclass(frozen=True)
class BarcodeDirective:
    symbology: str
    payload: str
    rotation: Rotation = Rotation.NONE
    symbol: Any = None


@dataclass(frozen=True)
class ResolvedValue:
    """The literal to paint for a field and how to paint it."""

    text: str
    kind: ValueKind = ValueKind.PLAIN
    repeat: bool = False
    barcode: Optional[BarcodeDirective] = None
    suppressed: bool = False


@dataclass(frozen=True)
class DrawText:
    text: str
    font: str
    style: Optional[FontStyle]
    size: float
    align: TextAlign
    overflow: Overflow
    min_font_size: float
    height: float
    kerning: bool = True
    inline_format: bool = True


@dataclass(frozen=True)
class FillCheckbox:
    filled: bool
    height: float


@dataclass(frozen=True)
class DrawBarcode:
    symbol: Any
    xdim: float
    height: float
    rotation: Rotation = Rotation.NONE


@dataclass(frozen=True)
class StrokeBounds:
    height: float


Payload = Union[DrawText, FillCheckbox, DrawBarcode, StrokeBounds]


@dataclass(frozen=True)
class Placement:
    """A single drawing instruction anchored at the top-left corner of a cell."""

    page: int
    x: float
    y: float
    width: float
    payload: Payload


__all__ = [
    "BarcodeDirective",
    "Box",
    "DrawBarcode",
    "DrawText",
    "FieldKind",
    "FieldRefs",
    "FieldSpec",
    "FillCheckbox",
    "FontStyle",
    "Overflow",
    "Payload",
    "Placement",
    "ResolvedValue",
    "Rotation",
    "StrokeBounds",
    "TextAlign",
    "ValueKind",
]
