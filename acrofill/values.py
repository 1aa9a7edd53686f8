"""Resolution and classification of the value painted into each field."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Optional, Union

from .barcodes import BarcodeProvider, ReportlabBarcodeProvider
from .context import ExpressionContext, injected_variable
from .errors import BarcodeError, UnknownSymbologyError
from .models import BarcodeDirective, FieldSpec, ResolvedValue, Rotation, ValueKind
from .utils import get_logger

logger = get_logger(__name__)

PAGE_VARIABLE = "_fill_form_page"

_LABEL_PATTERN = re.compile(r"^label\s+(.*)", re.DOTALL)
_PATH_COMMA = re.compile(r"(\S),")
_NAME_TAG = re.compile(r"\|\d+$")
_DIRECTIVES = {
    "barcode": Rotation.NONE,
    "barcode-l": Rotation.LEFT,
    "barcode-r": Rotation.RIGHT,
}

ValueSource = Union[Mapping, ExpressionContext, None]


def expression_for(name: str) -> str:
    """Turn a field name into an evaluator path.

    Authoring tools reserve ``.`` in field names, so ``,`` stands in for it;
    a trailing ``|<digits>`` only disambiguates duplicate names.
    """

    return _NAME_TAG.sub("", _PATH_COMMA.sub(r"\1.", name))


class ValueResolver:
    """Produce a :class:`ResolvedValue` for a field from a value source."""

    def __init__(self, barcodes: Optional[BarcodeProvider] = None) -> None:
        self._barcodes = barcodes if barcodes is not None else ReportlabBarcodeProvider()

    def lookup(self, field: FieldSpec, source: ValueSource, page: int = 1) -> str:
        if source is None or isinstance(source, Mapping):
            value = source.get(field.name) if source is not None else None
            if value is None:
                value = field.default_value
            return str(value)

        expression = expression_for(field.name)
        with injected_variable(source, PAGE_VARIABLE, page):
            value = source.evaluate(expression)
        logger.debug("%s = %s", field.name, value)
        return "" if value is None else str(value)

    def resolve(self, field: FieldSpec, source: ValueSource, page: int = 1) -> ResolvedValue:
        return self.classify(self.lookup(field, source, page), field_name=field.name)

    def classify(self, text: str, field_name: str = "") -> ResolvedValue:
        repeat = False
        kind = ValueKind.PLAIN
        match = _LABEL_PATTERN.match(text)
        if match:
            text = match.group(1)
            repeat = True
            kind = ValueKind.LABEL

        tokens = text.split(" ")
        rotation = _DIRECTIVES.get(tokens[0])
        if rotation is None:
            return ResolvedValue(text=text, kind=kind, repeat=repeat)

        payload = " ".join(tokens[2:]).strip()
        if len(tokens) < 2 or not tokens[1] or not payload:
            return ResolvedValue(text=text, kind=kind, repeat=repeat)

        try:
            symbol = self._barcodes.create(tokens[1].lower(), payload)
        except UnknownSymbologyError as exc:
            logger.warning("Unknown barcode symbology %s for field %s", exc.symbology, field_name)
            return ResolvedValue(text=text, kind=kind, repeat=repeat, suppressed=True)
        except BarcodeError as exc:
            logger.warning("Cannot draw %s barcode for field %s: %s", exc.symbology, field_name, exc)
            return ResolvedValue(text=text, kind=kind, repeat=repeat, suppressed=True)

        directive = BarcodeDirective(
            symbology=tokens[1].lower(),
            payload=payload,
            rotation=rotation,
            symbol=symbol,
        )
        return ResolvedValue(text=text, kind=ValueKind.BARCODE, repeat=repeat, barcode=directive)


__all__ = ["PAGE_VARIABLE", "ValueResolver", "ValueSource", "expression_for"]
