"""
Protocol/phone normalization and other identifier helpers.

Protocol ids and phone numbers arrive with formatting noise (dots, dashes,
spaces), so every cross-table comparison goes through the digits-only form
produced here, both in Python (digits_only) and in SQL (digits_only_sql).
"""

from __future__ import annotations

import re
from typing import Any, Optional

from sqlalchemy import String, cast, func
from sqlalchemy.sql.elements import ColumnElement

DEFAULT_FILENAME = "export"
FILENAME_MAX_LENGTH = 100

_NON_DIGITS = re.compile(r"\D")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def digits_only(value: Any) -> str:
    """Strip every non-digit character. None becomes an empty string."""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def digits_only_sql(column: Any) -> ColumnElement:
    """SQL counterpart of digits_only for use in filters and join conditions."""
    return func.regexp_replace(cast(column, String), "[^0-9]", "", "g", type_=String)


def resolve_display_name(*candidates: Optional[str]) -> str:
    """Return the first non-empty candidate, in priority order, or an empty string."""
    for candidate in candidates:
        if candidate is None:
            continue
        text = str(candidate).strip()
        if text:
            return text
    return ""


def sanitize_filename(value: Any) -> str:
    """
    Make a value safe for a Content-Disposition filename.

    Runs of characters outside [A-Za-z0-9._-] become a single underscore and the
    result is cut to 100 characters. Falls back to DEFAULT_FILENAME when nothing
    meaningful is left.
    """
    safe = _UNSAFE_FILENAME_CHARS.sub("_", "" if value is None else str(value))
    safe = safe[:FILENAME_MAX_LENGTH]
    if not safe.strip("_"):
        return DEFAULT_FILENAME
    return safe
