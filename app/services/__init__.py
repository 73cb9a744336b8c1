from app.services.chat_message_service import ChatMessageService
from app.services.export_service import ExportService
from app.services.history_service import HistoryService

__all__ = [
    "ChatMessageService",
    "ExportService",
    "HistoryService",
]
