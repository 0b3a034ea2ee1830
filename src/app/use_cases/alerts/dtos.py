"""
Panic Alert Use Case DTOs

Response field names follow the mobile wire contract.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TriggerPanicCommand(BaseModel):
    device_id: Optional[str] = None
    trigger_type: str = "botao_panico"
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    accuracy_m: Optional[float] = None
    ip_address: Optional[str] = None


class CancelPanicCommand(BaseModel):
    cancel_type: str = "manual"
    reason: Optional[str] = Field(default=None, max_length=500)
    ip_address: Optional[str] = None


class TriggerPanicResponse(BaseModel):
    success: bool = True
    alerta_id: str
    protocolo: str
    rede_apoio_notificada: bool
    autoridades_acionadas: bool
    already_active: bool = False
    codigo_compartilhamento: Optional[str] = None
    sessao_id: Optional[str] = None


class CancelPanicResponse(BaseModel):
    success: bool = True
    alerta_id: str
    protocolo: str
    tipo_cancelamento: str
    cancelado_dentro_janela: bool
    tempo_ate_cancelamento_segundos: int
    escalated: bool
    autoridades_acionadas: bool
    guardioes_notificados: bool
    window_selada: bool
    window_id: Optional[str] = None
