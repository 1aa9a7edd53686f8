"""Form fill engine: extract fields, resolve values and paint them."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .barcodes import BarcodeProvider
from .config import FillOptions
from .graph import ObjectGraph
from .layout import plan
from .models import DrawBarcode, DrawText, FieldSpec, FillCheckbox, Placement, StrokeBounds
from .parser import extract_field_specs
from .surface import RenderingSurface
from .values import ValueResolver
from .utils import get_logger

logger = get_logger(__name__)


class FormFillEngine:
    """Fill an AcroForm by painting values over its widgets.

    The engine is not reentrant: starting a fill while another fill on the
    same surface is running has undefined results.
    """

    def __init__(
        self,
        graph: ObjectGraph,
        surface: RenderingSurface,
        barcodes: Optional[BarcodeProvider] = None,
    ) -> None:
        self._graph = graph
        self._surface = surface
        self._resolver = ValueResolver(barcodes)

    def field_specs(self) -> Optional[List[FieldSpec]]:
        return extract_field_specs(self._graph)

    def field_names(self) -> List[str]:
        """Return the name of every fillable field, in document order."""

        specs = self.field_specs()
        if not specs:
            return []
        return [spec.name for spec in specs]

    def fill(self, values: Optional[Mapping[str, Any]] = None, options: Optional[FillOptions] = None) -> None:
        """Paint a value into every text and checkbox field.

        Values come from ``options.context`` when set, else from ``values``
        with each field's default value as fallback.
        """

        options = options or FillOptions()
        specs = self.field_specs()
        if specs is None:
            logger.info("Document has no interactive form; nothing to fill")
            return
        if not specs:
            logger.info("Interactive form has no fillable fields")
            return

        source = options.context if options.context is not None else (values or {})
        saved_page_number = self._surface.page_number
        drawn = 0
        try:
            for spec in specs:
                for page in options.target_pages(spec.page_number):
                    if not 1 <= page <= self._surface.page_count:
                        logger.warning("Skipping field %s on page %d: document has %d pages",
                                       spec.name, page, self._surface.page_count)
                        continue
                    value = self._resolver.resolve(spec, source, page=page)
                    placements = plan(spec, value, options, page)
                    self._surface.go_to_page(page)
                    for placement in placements:
                        self._dispatch(placement)
                    drawn += len(placements)
        finally:
            self._surface.go_to_page(saved_page_number)

        logger.info("Painted %d placements for %d fields", drawn, len(specs))
        if options.remove_fields:
            self._remove_widgets(specs)

    def _dispatch(self, placement: Placement) -> None:
        payload = placement.payload
        x, y, width = placement.x, placement.y, placement.width
        if isinstance(payload, StrokeBounds):
            self._surface.stroke_rectangle(x, y, width, payload.height)
        elif isinstance(payload, FillCheckbox):
            if payload.filled:
                self._surface.fill_rectangle(x, y, width, payload.height)
        elif isinstance(payload, DrawText):
            self._surface.draw_text(x, y, width, payload)
        elif isinstance(payload, DrawBarcode):
            self._surface.draw_barcode(x, y, width, payload)
        else:
            raise TypeError(f"unknown placement payload {payload!r}")

    def _remove_widgets(self, specs: List[FieldSpec]) -> None:
        # Each widget lives in the annotations of its own page only, so the
        # removal is scoped to that page however many pages were painted.
        removed = 0
        for spec in specs:
            if spec.refs is None:
                continue
            self._graph.remove_field(spec.refs.container, spec.refs.field)
            if self._graph.remove_annotation(spec.refs.page, spec.refs.field):
                removed += 1
        logger.debug("Removed %d widget annotations", removed)


__all__ = ["FormFillEngine"]
