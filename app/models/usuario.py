"""Usuario model: operators/agents."""

from __future__ import annotations

from sqlalchemy import Column, Integer, String

from app.db import Base


class Usuario(Base):
    __tablename__ = "usuario"

    id_users = Column(Integer, primary_key=True)
    display_name = Column(String(256), nullable=True)
    nome = Column(String(256), nullable=True)
    email = Column(String(256), nullable=True)
