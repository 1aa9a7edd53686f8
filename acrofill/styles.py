"""Parsing of AcroForm default style (``/DS``) strings.

A default style string is a small CSS-like declaration, for example::

    font: italic bold 'Times New Roman' 14.0pt; text-align:center; color:#000000

Only the font family, the italic/bold prefixes, the point size and the text
alignment are used. Anything that does not match leaves the corresponding
attribute unset so callers can apply their own defaults.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .models import FontStyle, TextAlign

_FONT_PATTERN = re.compile(
    r"""
    font:\s*
    (?P<styles>(?:(?:italic|bold)\s+)*)
    (?:
        '(?P<single>[^']+)' |
        "(?P<double>[^"]+)" |
        (?P<bare>[^,\s;'"]+)
    )
    (?P<rest>[^;]*)
    """,
    re.VERBOSE,
)
_SIZE_PATTERN = re.compile(r"(?:^|[\s,])(\d+(?:\.\d*)?|\.\d+)pt\b")
_ALIGN_PATTERN = re.compile(r"text-align:\s*(\w+)")


@dataclass(frozen=True)
class StyleInfo:
    font: Optional[str] = None
    font_style: Optional[FontStyle] = None
    font_size: Optional[float] = None
    align: Optional[TextAlign] = None


def _font_style(prefix: str) -> FontStyle:
    tokens = set(prefix.split())
    if {"italic", "bold"} <= tokens:
        return FontStyle.BOLD_ITALIC
    if "bold" in tokens:
        return FontStyle.BOLD
    if "italic" in tokens:
        return FontStyle.ITALIC
    return FontStyle.NORMAL


def _text_align(value: str) -> Optional[TextAlign]:
    try:
        return TextAlign(value.lower())
    except ValueError:
        return None


def parse_style(style: Optional[str]) -> StyleInfo:
    """Parse a default style string into font and alignment attributes."""

    if not style:
        return StyleInfo()

    font = font_style = font_size = None
    match = _FONT_PATTERN.search(style)
    if match:
        font = match.group("single") or match.group("double") or match.group("bare")
        font_style = _font_style(match.group("styles"))
        size_match = _SIZE_PATTERN.search(match.group("rest"))
        if size_match:
            font_size = float(size_match.group(1))

    align = None
    align_match = _ALIGN_PATTERN.search(style)
    if align_match:
        align = _text_align(align_match.group(1))

    return StyleInfo(font=font, font_style=font_style, font_size=font_size, align=align)


__all__ = ["StyleInfo", "parse_style"]
