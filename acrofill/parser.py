"""Extraction of fillable field specs from an AcroForm object graph."""

from __future__ import annotations

from typing import Any, Dict, Hashable, List, Optional

from .errors import UnsupportedFieldKindError
from .graph import ObjectGraph
from .models import FieldKind, FieldRefs, FieldSpec
from .styles import parse_style
from .utils import get_logger, normalize_field_name

logger = get_logger(__name__)

_FIELD_KINDS = {
    "/Tx": FieldKind.TEXT,
    "/Btn": FieldKind.CHECKBOX,
}


def _page_numbers(graph: ObjectGraph) -> Dict[Hashable, int]:
    return {graph.page_key(page): index for index, page in enumerate(graph.pages(), start=1)}


def _is_widget(graph: ObjectGraph, field: Any) -> bool:
    annot_type = graph.get(field, "/Type")
    if annot_type is not None and annot_type != "/Annot":
        return False
    return graph.get(field, "/Subtype") == "/Widget"


def _box(graph: ObjectGraph, field: Any) -> Optional[tuple]:
    rect = graph.get(field, "/Rect")
    if rect is None:
        return None
    try:
        x0, y0, x1, y1 = (float(graph.resolve(coord)) for coord in rect)
    except (TypeError, ValueError):
        return None
    return (x0, y0, x1, y1)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return normalize_field_name(value) or ""
    return str(value)


def _style_string(graph: ObjectGraph, field: Any) -> Optional[str]:
    raw = graph.read_string(graph.raw(field, "/DS"))
    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        return raw.decode("latin-1")
    return raw


def _kind_attributes(graph: ObjectGraph, field: Any, kind: FieldKind) -> Dict[str, Any]:
    if kind == FieldKind.CHECKBOX:
        return {"checked": graph.get(field, "/AS") == "/On"}
    if kind == FieldKind.TEXT:
        default = graph.get(field, "/V")
        if default is None:
            default = graph.get(field, "/DV")
        style = parse_style(_style_string(graph, field))
        return {
            "default_value": _as_text(default),
            "font": style.font,
            "font_style": style.font_style,
            "font_size": style.font_size,
            "align": style.align,
        }
    raise UnsupportedFieldKindError(f"unhandled field kind {kind!r}")


def extract_field_specs(graph: ObjectGraph) -> Optional[List[FieldSpec]]:
    """Return the supported fields of the document's interactive form.

    Returns None when the document has no ``/AcroForm`` at all and an empty
    list when the form exists but holds no text or checkbox widgets. Fields
    keep document order; duplicate names are all kept.
    """

    acro_form = graph.get(graph.catalog(), "/AcroForm")
    if acro_form is None:
        return None

    pages = graph.pages()
    page_numbers = _page_numbers(graph)
    container = graph.get(acro_form, "/Fields")
    if container is None:
        return []

    specs: List[FieldSpec] = []
    for field_ref in list(container):
        field = graph.resolve(field_ref)
        if field is None or not _is_widget(graph, field):
            continue
        kind = _FIELD_KINDS.get(graph.get(field, "/FT"))
        if kind is None:
            continue

        name = normalize_field_name(graph.get(field, "/T"))
        if name is None:
            logger.debug("Skipping acroform field without a name: %s", field_ref)
            continue
        box = _box(graph, field)
        if box is None:
            logger.debug("Skipping acroform field %s without a usable /Rect", name)
            continue

        attributes = _kind_attributes(graph, field, kind)

        page_ref = graph.raw(field, "/P")
        if page_ref is None:
            if len(pages) == 1:
                page_ref = pages[0]
            else:
                logger.warning("Missing page reference for acroform field %s", name)
                continue
        page_number = page_numbers.get(graph.page_key(page_ref))
        if page_number is None:
            logger.warning("Page reference for acroform field %s is not a document page", name)
            continue

        specs.append(
            FieldSpec(
                name=name,
                kind=kind,
                box=box,
                page_number=page_number,
                refs=FieldRefs(page=page_ref, field=field_ref, container=container),
                **attributes,
            )
        )
    logger.debug("Extracted %d acroform field specs", len(specs))
    return specs


__all__ = ["extract_field_specs"]
