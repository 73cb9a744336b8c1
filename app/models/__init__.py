from app.models.atendimento import Atendimento
from app.models.chat import Chat
from app.models.flow_log import FlowLog
from app.models.usuario import Usuario

__all__ = [
    "Atendimento",
    "Chat",
    "FlowLog",
    "Usuario",
]
