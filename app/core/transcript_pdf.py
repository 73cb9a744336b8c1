"""
Transcript PDF rendering (reportlab platypus).

Layout: a header block with the protocol metadata, a grey rule, then one block per
message ("<sender> — <time>" in bold, then the text). Operator blocks are right
aligned, customer blocks left aligned, with a thin rule between consecutive
messages. Documents are built in invariant mode so identical input gives
identical bytes.
"""

from __future__ import annotations

from html import escape
from io import BytesIO
from typing import Dict, List, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Flowable, HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from app.core.formatting import format_timestamp, or_placeholder
from app.schemas.historico import ChatMessageRead, ProtocolMeta

TITLE = "Support History"
OPERATOR_LABEL = "Operator"
CUSTOMER_LABEL = "Customer"

MARGIN = 50
DEFAULT_DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"


def _esc(text: Optional[str]) -> str:
    return escape(text or "", quote=False).replace("\n", "<br/>")


def sender_label(message: ChatMessageRead) -> str:
    """Operator lines carry the agent's name; customer lines a fixed label."""
    if message.sent_by_operator:
        return message.nome or OPERATOR_LABEL
    return CUSTOMER_LABEL


def _styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()["Normal"]
    styles = {
        "title": ParagraphStyle(
            "title", parent=base, fontName="Helvetica-Bold", fontSize=18, leading=22
        ),
        "info": ParagraphStyle(
            "info", parent=base, fontName="Helvetica", fontSize=12, leading=15
        ),
    }
    for side, alignment in (("left", TA_LEFT), ("right", TA_RIGHT)):
        styles[f"author_{side}"] = ParagraphStyle(
            f"author_{side}",
            parent=base,
            fontName="Helvetica-Bold",
            fontSize=12,
            leading=15,
            textColor=colors.HexColor("#111111"),
            alignment=alignment,
        )
        styles[f"text_{side}"] = ParagraphStyle(
            f"text_{side}",
            parent=base,
            fontName="Helvetica",
            fontSize=12,
            leading=15,
            textColor=colors.HexColor("#333333"),
            alignment=alignment,
        )
    return styles


def build_transcript_story(
    meta: ProtocolMeta,
    messages: Sequence[ChatMessageRead],
    tz_name: str = "UTC",
    datetime_format: str = DEFAULT_DATETIME_FORMAT,
) -> List[Flowable]:
    """Flowables for the header and every message, in transcript order."""
    styles = _styles()

    def when(value):
        return format_timestamp(value, tz_name, datetime_format)

    story: List[Flowable] = [Paragraph(TITLE, styles["title"]), Spacer(1, 6)]
    header_lines = [
        f"Protocol: {meta.protocolo}",
        f"Phone: {or_placeholder(meta.cliente_contato)}",
        f"Agent: {or_placeholder(meta.atendente_nome)}",
        f"Opened at: {when(meta.data_abertura)}",
        f"Last message: {when(meta.ultima_msg_em)}",
        f"Total messages: {meta.total_msgs}",
    ]
    for line in header_lines:
        story.append(Paragraph(_esc(line), styles["info"]))
    story.append(
        HRFlowable(
            width="100%",
            thickness=1,
            color=colors.HexColor("#cccccc"),
            spaceBefore=12,
            spaceAfter=12,
        )
    )

    last = len(messages) - 1
    for idx, message in enumerate(messages):
        side = "right" if message.sent_by_operator else "left"
        author = f"{sender_label(message)} — {when(message.created_at)}"
        story.append(Paragraph(_esc(author), styles[f"author_{side}"]))
        story.append(Paragraph(_esc(message.message), styles[f"text_{side}"]))
        if idx < last:
            story.append(
                HRFlowable(
                    width="100%",
                    thickness=0.5,
                    color=colors.HexColor("#eeeeee"),
                    spaceBefore=6,
                    spaceAfter=6,
                )
            )
    return story


def render_transcript_pdf(
    meta: ProtocolMeta,
    messages: Sequence[ChatMessageRead],
    tz_name: str = "UTC",
    datetime_format: str = DEFAULT_DATETIME_FORMAT,
) -> bytes:
    """Render the whole document in memory and return the PDF bytes."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title=f"{TITLE} {meta.protocolo}",
        invariant=1,
    )
    doc.build(build_transcript_story(meta, messages, tz_name, datetime_format))
    return buffer.getvalue()
