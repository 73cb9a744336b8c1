"""Pydantic schemas for the support history API (filters, protocol rows, messages)."""

from __future__ import annotations

import re
from datetime import MAXYEAR, MINYEAR, datetime, timezone
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from app.core.formatting import ensure_utc
from app.core.protocol import digits_only

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

_MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")
_LEADING_INT = re.compile(r"\s*([-+]?\d+)")


def _to_int(value: Any, default: int) -> int:
    """Leading integer of value ("2abc" -> 2, "1.5" -> 1), else default."""
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if match is None:
        return default
    return int(match.group(1))


def _parse_month(value: Any) -> Optional[str]:
    """Return "YYYY-MM" when value is a valid month, otherwise None."""
    month = str(value or "").strip()
    if not _MONTH_PATTERN.match(month):
        return None
    if not 1 <= int(month[5:7]) <= 12:
        return None
    # December rolls the range end into the next year
    if not MINYEAR <= int(month[:4]) < MAXYEAR:
        return None
    return month


# -----------------------------------------------------------------------------
# Filters
# -----------------------------------------------------------------------------


class HistoryFilters(BaseModel):
    """
    Strict internal filter for the history list.

    Build it with from_query(), which coerces raw request values instead of
    rejecting them: phone keeps digits only, a malformed month is dropped, page is
    floored at 1 and page_size is clamped into [1, 100].
    """

    phone: str = ""
    month: Optional[str] = None
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @classmethod
    def from_query(
        cls,
        phone: Any = None,
        month: Any = None,
        page: Any = None,
        page_size: Any = None,
    ) -> "HistoryFilters":
        return cls(
            phone=digits_only(phone),
            month=_parse_month(month),
            page=max(_to_int(page, DEFAULT_PAGE), 1),
            page_size=min(max(_to_int(page_size, DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def month_range(self) -> Optional[Tuple[datetime, datetime]]:
        """Half-open [start, next month start) interval in UTC, or None."""
        if self.month is None:
            return None
        year, month = int(self.month[:4]), int(self.month[5:7])
        start = datetime(year, month, 1, tzinfo=timezone.utc)
        if month == 12:
            end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
        else:
            end = datetime(year, month + 1, 1, tzinfo=timezone.utc)
        return start, end


# -----------------------------------------------------------------------------
# Protocol rows
# -----------------------------------------------------------------------------


class ProtocolSummary(BaseModel):
    """One protocol row of the history list."""

    id: str
    numero: str
    cliente_contato: str = ""
    atendente_nome: str = ""
    data_abertura: Optional[datetime] = None
    ultima_msg_em: Optional[datetime] = None
    total_msgs: int = 0

    @field_validator("data_abertura", "ultima_msg_em")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class HistoryPage(BaseModel):
    """Paginated history list; total counts every filtered protocol."""

    page: int
    page_size: int = Field(alias="pageSize")
    total: int
    data: List[ProtocolSummary]

    model_config = {"populate_by_name": True}


class ProtocolMeta(BaseModel):
    """Header metadata of a single protocol (PDF export)."""

    protocolo: str
    cliente_contato: str = ""
    atendente_nome: str = ""
    data_abertura: Optional[datetime] = None
    ultima_msg_em: Optional[datetime] = None
    total_msgs: int = 0

    @field_validator("data_abertura", "ultima_msg_em")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)

    @classmethod
    def empty(cls, protocol: str) -> "ProtocolMeta":
        """Defaults for a protocol without any logged events."""
        return cls(protocolo=protocol)


# -----------------------------------------------------------------------------
# Messages
# -----------------------------------------------------------------------------


class ChatMessageRead(BaseModel):
    """One transcript line; nome is the operator's name when sent_by_operator."""

    id: int
    sent_by_operator: bool
    history_id: Optional[int] = None
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    nome: Optional[str] = None

    model_config = {"from_attributes": True}

    @field_validator("sent_by_operator", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)
