"""PDF export of a protocol transcript."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import Settings
from app.core.protocol import sanitize_filename
from app.core.transcript_pdf import render_transcript_pdf
from app.exceptions import ExportError, error_detail
from app.services.chat_message_service import ChatMessageService
from app.services.history_service import HistoryService

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class TranscriptExport:
    filename: str
    content: bytes
    media_type: str = PDF_MEDIA_TYPE

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def export_filename(protocol: str) -> str:
    return f"historico_{sanitize_filename(protocol)}.pdf"


class ExportService:
    """Builds the transcript PDF from the same data as the list and message endpoints."""

    def __init__(self, db: Session, settings: Settings) -> None:
        self.settings = settings
        self._history_svc = HistoryService(db)
        self._message_svc = ChatMessageService(db)

    def export_pdf(self, protocol: str) -> TranscriptExport:
        """
        Render the whole document before anything is sent, so a storage or
        rendering failure surfaces as ExportError instead of a truncated file.
        """
        try:
            meta = self._history_svc.get_protocol_meta(protocol)
            messages = self._message_svc.get_messages(protocol)
        except SQLAlchemyError as e:
            logger.exception("Export query failed for protocol %s", protocol)
            raise ExportError(error_detail(e)) from e

        try:
            content = render_transcript_pdf(
                meta,
                messages,
                tz_name=self.settings.display_timezone,
                datetime_format=self.settings.datetime_format,
            )
        except Exception as e:
            logger.exception("PDF rendering failed for protocol %s", protocol)
            raise ExportError(str(e)) from e

        logger.info(
            "Exported protocol %s (%d messages, %d bytes)",
            protocol,
            len(messages),
            len(content),
        )
        return TranscriptExport(filename=export_filename(protocol), content=content)
