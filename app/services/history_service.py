"""
History query service: protocol rows aggregated from flow_log events.

A protocol's opening time, last activity, event count and contact phone come from
its flow_log events; the closing agent comes from atendimentos -> usuario, joined
on the digits-only protocol id.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy import String, and_, cast, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from app.core.protocol import digits_only_sql, resolve_display_name
from app.exceptions import HistoryQueryError, error_detail
from app.models.atendimento import Atendimento
from app.models.flow_log import FlowLog
from app.models.usuario import Usuario
from app.schemas.historico import (
    HistoryFilters,
    HistoryPage,
    ProtocolMeta,
    ProtocolSummary,
)

logger = logging.getLogger(__name__)


def _where(stmt: Select, conditions: Sequence[ColumnElement]) -> Select:
    if conditions:
        return stmt.where(and_(*conditions))
    return stmt


class HistoryService:
    """Read-only queries over flow_log/atendimentos/usuario."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def event_conditions(self, filters: HistoryFilters) -> List[ColumnElement]:
        """flow_log predicates for the phone and month filters."""
        conditions: List[ColumnElement] = []
        if filters.phone:
            conditions.append(digits_only_sql(FlowLog.phone).contains(filters.phone))
        month_range = filters.month_range
        if month_range is not None:
            start, end = month_range
            conditions.append(FlowLog.created_at >= start)
            conditions.append(FlowLog.created_at < end)
        return conditions

    def count_protocols(self, conditions: Sequence[ColumnElement]) -> int:
        """Number of distinct protocols among the matching events."""
        grouped = _where(select(FlowLog.protocol), conditions).group_by(
            FlowLog.protocol
        )
        stmt = select(func.count()).select_from(grouped.subquery())
        return self.db.execute(stmt).scalar_one()

    def get_summary_query(
        self,
        conditions: Sequence[ColumnElement],
        ticket_protocol: Optional[str] = None,
    ) -> Select:
        """
        Per-protocol aggregate of the matching events, ordered by last activity.

        The contact phone is taken from the latest event; ties on created_at go to
        the highest flow_log.id. ticket_protocol narrows the ticket lookup when a
        single protocol is wanted.
        """
        events = _where(
            select(FlowLog.id, FlowLog.protocol, FlowLog.phone, FlowLog.created_at),
            conditions,
        ).cte("fl_filt")

        agg = (
            select(
                events.c.protocol,
                func.min(events.c.created_at).label("data_abertura"),
                func.max(events.c.created_at).label("ultima_msg_em"),
                func.count().label("total_msgs"),
            )
            .group_by(events.c.protocol)
            .cte("agg")
        )

        ranked = select(
            events.c.protocol,
            events.c.phone,
            func.row_number()
            .over(
                partition_by=events.c.protocol,
                order_by=(events.c.created_at.desc(), events.c.id.desc()),
            )
            .label("rn"),
        ).cte("ranked")
        contact = (
            select(ranked.c.protocol, ranked.c.phone)
            .where(ranked.c.rn == 1)
            .cte("contact")
        )

        # One ticket per normalised protocol (highest id) so the join never fans out
        tickets = (
            select(
                Atendimento.protocol,
                Usuario.display_name,
                Usuario.nome,
                Usuario.email,
                func.row_number()
                .over(
                    partition_by=digits_only_sql(Atendimento.protocol),
                    order_by=Atendimento.id_atendimentos.desc(),
                )
                .label("rn"),
            )
            .select_from(Atendimento)
            .outerjoin(
                Usuario,
                cast(Usuario.id_users, String)
                == cast(Atendimento.closed_by_user_id, String),
            )
        )
        if ticket_protocol is not None:
            tickets = tickets.where(Atendimento.protocol == ticket_protocol)
        tickets = tickets.cte("tickets")
        agents = (
            select(
                tickets.c.protocol,
                tickets.c.display_name,
                tickets.c.nome,
                tickets.c.email,
            )
            .where(tickets.c.rn == 1)
            .cte("agents")
        )

        return (
            select(
                agg.c.protocol,
                contact.c.phone.label("cliente_contato"),
                agents.c.display_name,
                agents.c.nome,
                agents.c.email,
                agg.c.data_abertura,
                agg.c.ultima_msg_em,
                agg.c.total_msgs,
            )
            .select_from(agg)
            .outerjoin(contact, contact.c.protocol == agg.c.protocol)
            .outerjoin(
                agents,
                digits_only_sql(agents.c.protocol) == digits_only_sql(agg.c.protocol),
            )
            .order_by(agg.c.ultima_msg_em.desc(), agg.c.protocol.desc())
        )

    def list_protocols(self, filters: HistoryFilters) -> HistoryPage:
        """Filtered, paginated protocol rows plus the total before pagination."""
        conditions = self.event_conditions(filters)
        try:
            total = self.count_protocols(conditions)
            stmt = (
                self.get_summary_query(conditions)
                .limit(filters.page_size)
                .offset(filters.offset)
            )
            rows = self.db.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            logger.exception("History list query failed")
            raise HistoryQueryError(error_detail(e)) from e

        return HistoryPage(
            page=filters.page,
            page_size=filters.page_size,
            total=total,
            data=[self._to_summary(row) for row in rows],
        )

    def get_protocol_meta(self, protocol: str) -> ProtocolMeta:
        """Header metadata for one protocol; defaults when it has no events."""
        stmt = self.get_summary_query(
            [FlowLog.protocol == protocol], ticket_protocol=protocol
        ).limit(1)
        row = self.db.execute(stmt).mappings().first()
        if row is None:
            return ProtocolMeta.empty(protocol)
        return ProtocolMeta(
            protocolo=str(row["protocol"] or protocol),
            cliente_contato=_text(row["cliente_contato"]),
            atendente_nome=_agent_name(row),
            data_abertura=row["data_abertura"],
            ultima_msg_em=row["ultima_msg_em"],
            total_msgs=row["total_msgs"] or 0,
        )

    @staticmethod
    def _to_summary(row: Any) -> ProtocolSummary:
        protocol = _text(row["protocol"])
        return ProtocolSummary(
            id=protocol,
            numero=protocol,
            cliente_contato=_text(row["cliente_contato"]),
            atendente_nome=_agent_name(row),
            data_abertura=row["data_abertura"],
            ultima_msg_em=row["ultima_msg_em"],
            total_msgs=row["total_msgs"] or 0,
        )


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _agent_name(row: Any) -> str:
    return resolve_display_name(row["display_name"], row["nome"], row["email"])
