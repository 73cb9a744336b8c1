"""Display formatting for timestamps shown to people (PDF export)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

PLACEHOLDER = "—"


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_timestamp(
    value: Optional[datetime],
    tz_name: str = "UTC",
    fmt: str = "%d/%m/%Y %H:%M:%S",
) -> str:
    """Format a timestamp in the given timezone, or PLACEHOLDER when missing."""
    if value is None:
        return PLACEHOLDER
    tz = timezone.utc if tz_name.upper() == "UTC" else ZoneInfo(tz_name)
    return ensure_utc(value).astimezone(tz).strftime(fmt)


def or_placeholder(value: Optional[str]) -> str:
    return value if value else PLACEHOLDER
