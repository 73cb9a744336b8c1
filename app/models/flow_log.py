"""
FlowLog model: raw inbound/outbound events tied to a protocol.

Written by the external ingestion process; read-only here. Source of truth for
a protocol's contact phone, opening time and last activity.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Column, DateTime, Index, Integer, String

from app.db import Base


class FlowLog(Base):
    """Single logged event for a protocol and phone number."""

    __tablename__ = "flow_log"

    __table_args__ = (
        Index("ix_flow_log_protocol_created", "protocol", "created_at"),
    )

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True)
    protocol = Column(String(64), nullable=True)
    phone = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=True)
