"""Transcript retrieval: chat lines of one protocol in id order."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.exceptions import MessageQueryError, error_detail
from app.models.atendimento import Atendimento
from app.models.chat import Chat
from app.models.usuario import Usuario
from app.schemas.historico import ChatMessageRead

logger = logging.getLogger(__name__)


class ChatMessageService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_messages_query(self, protocol: str) -> Select:
        """Chats of the protocol's ticket(s), oldest id first, with the sender's name."""
        return (
            select(
                Chat.id,
                Chat.sent_by_operator,
                Chat.history_id,
                Chat.message,
                Chat.created_at,
                Usuario.nome,
            )
            .select_from(Chat)
            .join(Atendimento, Chat.history_id == Atendimento.id_atendimentos)
            .outerjoin(Usuario, Chat.user_id == Usuario.id_users)
            .where(Atendimento.protocol == protocol)
            .order_by(Chat.id.asc())
        )

    def get_messages(self, protocol: str) -> List[ChatMessageRead]:
        rows = self.db.execute(self.get_messages_query(protocol)).mappings().all()
        return [ChatMessageRead.model_validate(dict(row)) for row in rows]

    def list_messages(self, protocol: str) -> List[ChatMessageRead]:
        """Transcript for the API; an unknown protocol yields an empty list."""
        try:
            return self.get_messages(protocol)
        except SQLAlchemyError as e:
            logger.exception("Message query failed for protocol %s", protocol)
            raise MessageQueryError(error_detail(e)) from e
