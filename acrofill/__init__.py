"""acrofill package."""

from .barcodes import BarcodeSymbol, ReportlabBarcodeProvider
from .config import FillOptions
from .context import PathContext
from .errors import (
    AcroFillError,
    BarcodeError,
    ExpressionError,
    FormAbsentError,
    InvalidBarcodeError,
    UnknownSymbologyError,
    UnsupportedFieldKindError,
)
from .filler import FormFillEngine
from .graph import ObjectGraph, PypdfObjectGraph
from .models import FieldKind, FieldSpec, FontStyle, Overflow, ResolvedValue, Rotation, TextAlign, ValueKind
from .parser import extract_field_specs
from .pipeline import PdfForm, fill_pdf, list_fields
from .styles import StyleInfo, parse_style
from .surface import PyMuPDFSurface, RenderingSurface
from .values import ValueResolver

__all__ = [
	"AcroFillError",
	"BarcodeError",
	"BarcodeSymbol",
	"ExpressionError",
	"FieldKind",
	"FieldSpec",
	"FillOptions",
	"FontStyle",
	"FormAbsentError",
	"FormFillEngine",
	"InvalidBarcodeError",
	"ObjectGraph",
	"Overflow",
	"PathContext",
	"PdfForm",
	"PyMuPDFSurface",
	"PypdfObjectGraph",
	"RenderingSurface",
	"ReportlabBarcodeProvider",
	"ResolvedValue",
	"Rotation",
	"StyleInfo",
	"TextAlign",
	"UnknownSymbologyError",
	"UnsupportedFieldKindError",
	"ValueKind",
	"ValueResolver",
	"extract_field_specs",
	"fill_pdf",
	"list_fields",
	"parse_style",
]
