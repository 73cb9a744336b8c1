"""Atendimento model: the closed/handled ticket record of a protocol."""

from __future__ import annotations

from sqlalchemy import Column, Integer, String

from app.db import Base


class Atendimento(Base):
    """One row per handled protocol, including the agent who closed it."""

    __tablename__ = "atendimentos"

    id_atendimentos = Column(Integer, primary_key=True)
    protocol = Column(String(64), nullable=True, index=True)
    # Stored as text upstream; compared to usuario.id_users as text
    closed_by_user_id = Column(String(64), nullable=True)
