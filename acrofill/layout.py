"""Layout planning: turn a field and its value into placement instructions."""

from __future__ import annotations

from typing import List, Tuple

from .config import FillOptions
from .errors import UnsupportedFieldKindError
from .models import (
    Box,
    DrawBarcode,
    DrawText,
    FieldKind,
    FieldSpec,
    FillCheckbox,
    Payload,
    Placement,
    ResolvedValue,
    Rotation,
    StrokeBounds,
    TextAlign,
    ValueKind,
)


def normalize_box(box: Box) -> Tuple[float, float, float, float]:
    """Return ``(x, y, width, height)`` with ``(x, y)`` the top-left corner.

    PDF user space grows upwards, so the top edge is the larger y.
    """

    x0, y0, x1, y1 = box
    return min(x0, x1), max(y0, y1), abs(x0 - x1), abs(y0 - y1)


def grid_cells(options: FillOptions, repeat: bool) -> List[Tuple[int, int]]:
    if not repeat:
        return [(0, 0)]
    return [(row, col) for row in range(options.label_rows) for col in range(options.label_columns)]


def barcode_bounds(x: float, y: float, width: float, height: float, rotation: Rotation) -> Box:
    """Footprint ``(x0, y0, x1, y1)`` of a barcode rotated about the cell's bottom-left corner.

    ``width`` is the rendered barcode width and ``height`` the cell height;
    the unrotated barcode sits with its bottom-left corner on the pivot.
    """

    px, py = x, y - height
    if rotation == Rotation.LEFT:
        return px - height, py, px, py + width
    if rotation == Rotation.RIGHT:
        return px, py - width, px + height, py
    return px, py, px + width, py + height


def _content(field: FieldSpec, value: ResolvedValue, options: FillOptions, height: float) -> Payload:
    if value.kind == ValueKind.BARCODE and value.barcode is not None:
        return DrawBarcode(
            symbol=value.barcode.symbol,
            xdim=options.barcode_xdim,
            height=height,
            rotation=value.barcode.rotation,
        )
    if field.kind == FieldKind.CHECKBOX:
        return FillCheckbox(filled=field.checked, height=height)
    if field.kind == FieldKind.TEXT:
        return DrawText(
            text=value.text,
            font=field.font or options.font,
            style=field.font_style,
            size=field.font_size or options.font_size,
            align=field.align or TextAlign.LEFT,
            overflow=options.overflow,
            min_font_size=options.overflow_min_font_size,
            height=height,
        )
    raise UnsupportedFieldKindError(f"cannot lay out field kind {field.kind!r}")


def plan(field: FieldSpec, value: ResolvedValue, options: FillOptions, page: int) -> List[Placement]:
    """Plan the placements that paint ``value`` into ``field`` on ``page``.

    Label values are repeated over every cell of the label grid, anything
    else only fills the first cell. Suppressed values produce nothing.
    """

    if value.suppressed:
        return []

    x, y, width, height = normalize_box(field.box)
    content = _content(field, value, options, height)

    placements: List[Placement] = []
    for row, col in grid_cells(options, value.repeat):
        cell_x = x + options.label_offset_x * col
        cell_y = y + options.label_offset_y * row
        if options.show_bounds:
            placements.append(Placement(page, cell_x, cell_y, width, StrokeBounds(height=height)))
        placements.append(Placement(page, cell_x, cell_y, width, content))
    return placements


__all__ = ["barcode_bounds", "grid_cells", "normalize_box", "plan"]
