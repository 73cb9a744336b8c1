"""History API: protocol list, transcript and PDF export."""

from io import BytesIO
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.auth.session_auth import require_auth
from app.config import Settings
from app.db import get_db
from app.routers.utils.dependencies import get_app_settings
from app.schemas.historico import ChatMessageRead, HistoryFilters, HistoryPage
from app.services.chat_message_service import ChatMessageService
from app.services.export_service import ExportService
from app.services.history_service import HistoryService

router = APIRouter(
    prefix="/historico",
    tags=["historico"],
    dependencies=[Depends(require_auth)],
    responses={401: {"description": "Not authenticated"}},
)


@router.get("", response_model=HistoryPage)
def list_history(
    phone: Optional[str] = Query(None),
    month: Optional[str] = Query(None, description="YYYY-MM"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    db: Session = Depends(get_db),
) -> HistoryPage:
    """List protocols filtered by phone digits and month, newest activity first."""
    filters = HistoryFilters.from_query(
        phone=phone,
        month=month,
        page=page,
        page_size=page_size,
    )
    return HistoryService(db).list_protocols(filters)


@router.get("/{protocol}/mensagens", response_model=List[ChatMessageRead])
def list_history_messages(
    protocol: str,
    db: Session = Depends(get_db),
) -> List[ChatMessageRead]:
    """Transcript of a protocol in message id order."""
    return ChatMessageService(db).list_messages(protocol)


@router.get(
    "/{protocol}/export.pdf",
    response_class=StreamingResponse,
    responses={200: {"content": {"application/pdf": {}}}},
)
def export_history_pdf(
    protocol: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> StreamingResponse:
    """Download the transcript of a protocol as PDF."""
    export = ExportService(db, settings).export_pdf(protocol)
    return StreamingResponse(
        BytesIO(export.content),
        media_type=export.media_type,
        headers={"Content-Disposition": export.content_disposition},
    )
