"""Chat model: one row per chat line of a ticket; id order is chronological order."""

from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, Text

from app.db import Base


class Chat(Base):
    """Single chat message. sent_by_operator distinguishes agent from customer lines."""

    __tablename__ = "chats"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True)
    sent_by_operator = Column(Boolean, nullable=False, default=False)
    history_id = Column(Integer, nullable=True, index=True)  # atendimentos.id_atendimentos
    message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=True)
    user_id = Column(Integer, nullable=True)  # usuario.id_users, set for operator lines
