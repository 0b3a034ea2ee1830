"""
Safety Core Domain Enums

All enumeration types used across domain entities.
Persisted enums keep member names equal to values (SQLAlchemy stores names).
"""

from enum import Enum


class IdentityStatus(str, Enum):
    """Account status"""

    ativo = "ativo"
    inativo = "inativo"
    bloqueado = "bloqueado"


class AuthTag(str, Enum):
    """Outcome of a dual-credential password check"""

    normal = "normal"
    duress = "coacao"
    invalid = "invalido"


class AlertStatus(str, Enum):
    """Panic alert lifecycle (cancelado is terminal)"""

    ativo = "ativo"
    cancelado = "cancelado"


class MonitoringStatus(str, Enum):
    """Monitoring session lifecycle"""

    ativa = "ativa"
    aguardando_finalizacao = "aguardando_finalizacao"
    deleted = "deleted"


class SessionOrigin(str, Enum):
    """Why a monitoring session was started"""

    automatico = "automatico"
    botao_panico = "botao_panico"
    agendado = "agendado"
    comando_voz = "comando_voz"
    botao_manual = "botao_manual"


class DeviceConnectivity(str, Enum):
    """Device liveness as last reported"""

    online = "online"
    offline = "offline"


class MovementStatus(str, Enum):
    """Mode of travel derived from GPS speed"""

    parado = "parado"
    caminhando = "caminhando"
    veiculo = "veiculo"
