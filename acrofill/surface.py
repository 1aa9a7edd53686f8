"""Rendering surfaces that paint placements onto pages.

:class:`PyMuPDFSurface` draws into a blank overlay document with one page per
target page. Coordinates passed in are PDF user space (origin bottom-left);
they are converted to PyMuPDF's top-left page space on the way in. The overlay
is merged back onto the real pages by :mod:`acrofill.pipeline`.
"""

from __future__ import annotations

import html
from typing import List, Protocol, Sequence, Set, Tuple

import fitz

from .layout import barcode_bounds
from .models import DrawBarcode, DrawText, FontStyle, Overflow
from .utils import get_logger

logger = get_logger(__name__)

MediaBox = Tuple[float, float, float, float]

_BLACK = (0, 0, 0)
_BOUNDS_LINE_WIDTH = 0.5


class RenderingSurface(Protocol):
    @property
    def page_number(self) -> int: ...

    @property
    def page_count(self) -> int: ...

    def go_to_page(self, number: int) -> None: ...

    def draw_text(self, x: float, y: float, width: float, text: DrawText) -> None: ...

    def fill_rectangle(self, x: float, y: float, width: float, height: float) -> None: ...

    def stroke_rectangle(self, x: float, y: float, width: float, height: float) -> None: ...

    def draw_barcode(self, x: float, y: float, width: float, barcode: DrawBarcode) -> None: ...


def _generic_family(font: str) -> str:
    lowered = font.lower()
    if "courier" in lowered or "mono" in lowered:
        return "monospace"
    if ("times" in lowered or "serif" in lowered) and "sans" not in lowered:
        return "serif"
    return "sans-serif"


def text_css(text: DrawText) -> str:
    """CSS for a text placement rendered through ``insert_htmlbox``."""

    family = text.font.replace('"', "")
    rules = [
        f'font-family: "{family}", {_generic_family(family)}',
        f"font-size: {text.size:g}pt",
        f"text-align: {text.align.value}",
        f"font-kerning: {'normal' if text.kerning else 'none'}",
    ]
    if text.style in (FontStyle.BOLD, FontStyle.BOLD_ITALIC):
        rules.append("font-weight: bold")
    if text.style in (FontStyle.ITALIC, FontStyle.BOLD_ITALIC):
        rules.append("font-style: italic")
    return "* {" + "; ".join(rules) + ";}"


def text_html(text: DrawText) -> str:
    body = text.text if text.inline_format else html.escape(text.text)
    return body.replace("\r\n", "\n").replace("\n", "<br>")


class PyMuPDFSurface:
    """Overlay document with pages matching the given media boxes."""

    def __init__(self, media_boxes: Sequence[MediaBox]) -> None:
        if not media_boxes:
            raise ValueError("At least one page is required")
        self._media_boxes: List[MediaBox] = [tuple(float(v) for v in box) for box in media_boxes]
        self._doc = fitz.open()
        for x0, y0, x1, y1 in self._media_boxes:
            self._doc.new_page(width=abs(x1 - x0), height=abs(y1 - y0))
        self._page_number = 1
        self._touched: Set[int] = set()

    @property
    def document(self) -> fitz.Document:
        return self._doc

    @property
    def page_number(self) -> int:
        return self._page_number

    @property
    def page_count(self) -> int:
        return len(self._media_boxes)

    @property
    def touched_pages(self) -> List[int]:
        return sorted(self._touched)

    def go_to_page(self, number: int) -> None:
        if not 1 <= number <= self.page_count:
            raise IndexError(f"page {number} out of range 1..{self.page_count}")
        self._page_number = number

    def _page(self) -> fitz.Page:
        self._touched.add(self._page_number)
        return self._doc[self._page_number - 1]

    def _origin(self) -> Tuple[float, float]:
        x0, y0, x1, y1 = self._media_boxes[self._page_number - 1]
        return min(x0, x1), max(y0, y1)

    def _rect(self, x0: float, y0: float, x1: float, y1: float) -> fitz.Rect:
        left, top = self._origin()
        return fitz.Rect(
            min(x0, x1) - left,
            top - max(y0, y1),
            max(x0, x1) - left,
            top - min(y0, y1),
        )

    def draw_text(self, x: float, y: float, width: float, text: DrawText) -> None:
        page = self._page()
        rect = self._rect(x, y, x + width, y - text.height)
        scale_low = 1.0
        if text.overflow == Overflow.EXPAND:
            rect.y1 = page.rect.y1
        elif text.overflow == Overflow.SHRINK_TO_FIT and text.size > 0:
            scale_low = min(1.0, text.min_font_size / text.size)
        body, css = text_html(text), text_css(text)
        spare_height, scale = page.insert_htmlbox(rect, body, css=css, scale_low=scale_low)
        if spare_height < 0 and rect.y1 < page.rect.y1:
            logger.warning("Text %r overflows its field on page %d", text.text[:40], self._page_number)
            rect.y1 = page.rect.y1
            spare_height, scale = page.insert_htmlbox(rect, body, css=css, scale_low=scale_low)
        if spare_height < 0:
            # insert_htmlbox writes nothing when the content does not fit
            logger.warning("Text %r does not fit on page %d at its size", text.text[:40], self._page_number)
            spare_height, scale = page.insert_htmlbox(rect, body, css=css, scale_low=0)
        if scale < 1:
            logger.debug("Text %r shrunk to scale %.2f", text.text[:40], scale)

    def fill_rectangle(self, x: float, y: float, width: float, height: float) -> None:
        rect = self._rect(x, y, x + width, y - height)
        self._page().draw_rect(rect, color=_BLACK, fill=_BLACK, width=0)

    def stroke_rectangle(self, x: float, y: float, width: float, height: float) -> None:
        rect = self._rect(x, y, x + width, y - height)
        self._page().draw_rect(rect, color=_BLACK, width=_BOUNDS_LINE_WIDTH)

    def draw_barcode(self, x: float, y: float, width: float, barcode: DrawBarcode) -> None:
        page = self._page()
        with fitz.open("pdf", barcode.symbol.to_pdf(barcode.xdim, barcode.height)) as source:
            symbol_width = source[0].rect.width
            bounds = barcode_bounds(x, y, symbol_width, barcode.height, barcode.rotation)
            page.show_pdf_page(self._rect(*bounds), source, 0, rotate=int(barcode.rotation))

    def to_bytes(self) -> bytes:
        return self._doc.tobytes()

    def close(self) -> None:
        self._doc.close()

    def __enter__(self) -> "PyMuPDFSurface":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["MediaBox", "PyMuPDFSurface", "RenderingSurface", "text_css", "text_html"]
