"""Utility helpers for acrofill."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

_LOG_ENV = "ACROFILL_LOG"
_UTF16_BOM = b"\xfe\xff"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, attaching a stream handler on first use."""

    logger = logging.getLogger(name)
    level_name = os.getenv(_LOG_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def normalize_field_name(raw: Any) -> Optional[str]:
    """Decode a field name to text.

    Byte strings starting with a UTF-16BE byte order mark are transcoded,
    anything else is read as single-byte latin-1. Returns None when the
    name is missing or blank.
    """

    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        data = bytes(raw)
        if data.startswith(_UTF16_BOM):
            text = data[len(_UTF16_BOM):].decode("utf-16-be", errors="replace")
        else:
            text = data.decode("latin-1")
    else:
        text = str(raw)
    if not text.strip():
        return None
    return text


__all__ = ["get_logger", "normalize_field_name"]
