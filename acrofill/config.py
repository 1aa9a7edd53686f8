"""Fill options and their defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from dotenv import load_dotenv

from .context import ExpressionContext
from .models import Overflow

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

# environment variable -> option name
_ENV_OPTIONS = {
    "ACROFILL_FONT": "font",
    "ACROFILL_FONT_SIZE": "font_size",
    "ACROFILL_OVERFLOW": "overflow",
    "ACROFILL_OVERFLOW_MIN_FONT_SIZE": "overflow_min_font_size",
    "ACROFILL_BARCODE_XDIM": "barcode_xdim",
    "ACROFILL_SHOW_BOUNDS": "show_bounds",
    "ACROFILL_REMOVE_FIELDS": "remove_fields",
}


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    return bool(value)


def _to_overflow(value: Any) -> Overflow:
    if isinstance(value, Overflow):
        return value
    if value is None or value is False:
        return Overflow.NONE
    return Overflow(str(value).strip().lower().replace("-", "_"))


def _to_pages(value: Any) -> Union[int, List[int]]:
    if isinstance(value, str):
        value = [int(part) for part in value.split(",")] if "," in value else int(value)
    if isinstance(value, int):
        if value < 1:
            raise ValueError("pages must be at least 1")
        return value
    return [int(page) for page in value]


_COERCE = {
    "font": str,
    "font_size": float,
    "barcode_xdim": float,
    "label_rows": int,
    "label_columns": int,
    "label_offset_x": float,
    "label_offset_y": float,
    "overflow": _to_overflow,
    "overflow_min_font_size": float,
    "pages": _to_pages,
    "show_bounds": _to_bool,
    "remove_fields": _to_bool,
}


@dataclass(frozen=True)
class FillOptions:
    """Options controlling how field values are painted.

    ``pages`` is either a count of consecutive pages starting at each
    field's own page, or an explicit sequence of 1-based page numbers.
    ``context`` replaces the value mapping as the value source when set.
    """

    font: str = "Helvetica"
    font_size: float = 12
    barcode_xdim: float = 1
    label_rows: int = 1
    label_columns: int = 1
    label_offset_x: float = 0
    label_offset_y: float = 0
    overflow: Overflow = Overflow.EXPAND
    overflow_min_font_size: float = 8
    pages: Union[int, Sequence[int]] = 1
    show_bounds: bool = False
    remove_fields: bool = True
    context: Optional[ExpressionContext] = None

    def target_pages(self, page_number: int) -> List[int]:
        if isinstance(self.pages, int):
            return list(range(page_number, page_number + self.pages))
        return list(self.pages)

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]] = None) -> "FillOptions":
        if not values:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown fill options: {', '.join(unknown)}")
        kwargs: Dict[str, Any] = {}
        for name, value in values.items():
            coerce = _COERCE.get(name)
            if coerce is not None and (value is not None or name == "overflow"):
                value = coerce(value)
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides: Any) -> "FillOptions":
        """Build options from ``ACROFILL_*`` environment variables and a ``.env`` file."""

        load_dotenv(dotenv_path)
        values: Dict[str, Any] = {}
        for env_name, option in _ENV_OPTIONS.items():
            raw = os.getenv(env_name)
            if raw is not None and raw.strip():
                values[option] = raw.strip()
        values.update(overrides)
        return cls.from_mapping(values)


__all__ = ["FillOptions"]
