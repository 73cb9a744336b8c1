"""Errors surfaced to API callers as {"message": ..., "detail": ...}."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError


class HistoryError(Exception):
    """Base error for failed history operations; never retried."""

    message = "Request failed"
    status_code = 500

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.message)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"message": self.message, "detail": self.detail}


class HistoryQueryError(HistoryError):
    message = "Failed to list history"


class MessageQueryError(HistoryError):
    message = "Failed to list messages"


class ExportError(HistoryError):
    message = "Failed to generate PDF"


def error_detail(exc: SQLAlchemyError) -> str:
    """Driver message of a SQLAlchemy error, without the statement dump."""
    return str(getattr(exc, "orig", None) or exc)


async def history_error_handler(request: Request, exc: HistoryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


class NotAuthenticatedError(Exception):
    """Raised by the auth gate when no admin session is present."""

    message = "Not authenticated"
    status_code = 401


async def not_authenticated_handler(
    request: Request, exc: NotAuthenticatedError
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code, content={"ok": False, "message": exc.message}
    )
