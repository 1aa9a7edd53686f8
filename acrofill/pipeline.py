"""High level helpers to list and fill the fields of a PDF file."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, List, Mapping, Optional, Union

from pypdf import PdfReader, PdfWriter

from .barcodes import BarcodeProvider
from .config import FillOptions
from .errors import FormAbsentError
from .filler import FormFillEngine
from .graph import PypdfObjectGraph
from .models import FieldSpec
from .surface import MediaBox, PyMuPDFSurface
from .utils import get_logger

logger = get_logger(__name__)

PdfSource = Union[str, Path, bytes, BinaryIO]


def _media_box(page: Any) -> MediaBox:
    box = page.mediabox
    return (float(box.left), float(box.bottom), float(box.right), float(box.top))


def _reader(source: PdfSource) -> PdfReader:
    if isinstance(source, (bytes, bytearray)):
        return PdfReader(BytesIO(source))
    if isinstance(source, Path):
        return PdfReader(str(source))
    return PdfReader(source)


class PdfForm:
    """A PDF document opened for filling.

    Field values are painted onto an overlay that is merged into the pages
    when the document is saved.
    """

    def __init__(self, writer: PdfWriter, barcodes: Optional[BarcodeProvider] = None) -> None:
        self._writer = writer
        self._barcodes = barcodes
        self._graph = PypdfObjectGraph(writer)
        self._surface = PyMuPDFSurface([_media_box(page) for page in writer.pages])
        self._engine = FormFillEngine(self._graph, self._surface, barcodes)

    @classmethod
    def open(cls, source: PdfSource, barcodes: Optional[BarcodeProvider] = None) -> "PdfForm":
        return cls(PdfWriter(clone_from=_reader(source)), barcodes)

    @property
    def has_form(self) -> bool:
        return self._graph.get(self._graph.catalog(), "/AcroForm") is not None

    def field_specs(self) -> List[FieldSpec]:
        return self._engine.field_specs() or []

    def field_names(self) -> List[str]:
        return self._engine.field_names()

    def fill(self, values: Optional[Mapping[str, Any]] = None, options: Optional[FillOptions] = None) -> None:
        self._engine.fill(values, options)

    def _merge_overlay(self) -> None:
        touched = self._surface.touched_pages
        if touched:
            overlay = PdfReader(BytesIO(self._surface.to_bytes()))
            for number in touched:
                page = self._writer.pages[number - 1]
                left, bottom, _, _ = _media_box(page)
                page.merge_translated_page(overlay.pages[number - 1], tx=left, ty=bottom)
            logger.debug("Merged overlay onto pages %s", touched)
        self._surface.close()
        self._surface = PyMuPDFSurface([_media_box(page) for page in self._writer.pages])
        self._engine = FormFillEngine(self._graph, self._surface, self._barcodes)

    def to_bytes(self) -> bytes:
        self._merge_overlay()
        buffer = BytesIO()
        self._writer.write(buffer)
        return buffer.getvalue()

    def save(self, destination: Union[str, Path]) -> str:
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(self.to_bytes())
        logger.info("Saved filled PDF to %s", destination)
        return str(destination)


def list_fields(source: PdfSource) -> List[str]:
    """Return the fillable field names of a PDF, or an empty list without a form."""

    return PdfForm.open(source).field_names()


def fill_pdf(
    source: PdfSource,
    destination: Union[str, Path],
    values: Optional[Mapping[str, Any]] = None,
    options: Optional[FillOptions] = None,
    require_form: bool = False,
) -> str:
    """Fill ``source`` with ``values`` and save it to ``destination``.

    Parameters
    ----------
    source:
        Path, raw bytes or binary stream of the template PDF.
    destination:
        Where the filled PDF is written.
    values:
        Mapping of field name to value. Ignored for fields when
        ``options.context`` is set.
    options:
        Fill options; defaults to :class:`FillOptions`.
    require_form:
        Raise :class:`FormAbsentError` instead of copying the document
        unchanged when it has no interactive form.

    Returns
    -------
    str
        Path to the saved PDF.
    """

    form = PdfForm.open(source)
    if require_form and not form.has_form:
        raise FormAbsentError("PDF has no /AcroForm")
    form.fill(values, options)
    return form.save(destination)


__all__ = ["PdfForm", "PdfSource", "fill_pdf", "list_fields"]
