"""
Monitoring Use Case DTOs

Check-in, schedule and client status reports.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

from src.app.use_cases.auth.dtos import UserSummary

MonitoringStatusReport = Literal[
    "janela_iniciada", "janela_finalizada", "ativado", "desativado", "erro", "retomado"
]
RecordingStatusReport = Literal[
    "iniciada", "pausada", "retomada", "finalizada", "enviando", "erro"
]
RecordingOrigin = Literal[
    "automatico", "botao_panico", "agendado", "comando_voz", "botao_manual"
]


# ============================================================================
# Command DTOs
# ============================================================================


class SyncConfigCommand(BaseModel):
    device_id: Optional[str] = None
    timezone: Optional[str] = None
    timezone_offset_minutes: Optional[int] = None


class MonitoringStatusCommand(BaseModel):
    device_id: str
    status: MonitoringStatusReport
    reason: Optional[str] = None
    app_state: Optional[str] = None


class RecordingStatusCommand(BaseModel):
    device_id: Optional[str] = None
    status: RecordingStatusReport
    origin: RecordingOrigin = "botao_manual"
    stop_reason: Optional[str] = None
    total_segments: Optional[int] = None


# ============================================================================
# Response DTOs
# ============================================================================


class GuardianContact(BaseModel):
    id: str
    nome: str
    telefone_whatsapp: str
    relacao: Optional[str] = None
    is_primary: bool = False


class MonitoringState(BaseModel):
    ativo: bool
    sessao_id: Optional[str] = None
    periodos_semana: Dict[str, List[dict]]


class SyncConfigResponse(BaseModel):
    success: bool = True
    usuario: UserSummary
    monitoramento: MonitoringState
    gravacao_ativa: bool
    dentro_horario: bool
    periodo_atual_index: Optional[int] = None
    gravacao_inicio: Optional[str] = None
    gravacao_fim: Optional[str] = None
    periodos_hoje: List[dict]
    sessao_id: Optional[str] = None
    contatos_rede_apoio: List[GuardianContact]
    servidor_timestamp: datetime


class UpdateSchedulesResponse(BaseModel):
    success: bool = True
    message: str
    periodos_atualizados: Dict[str, List[dict]]


class StatusReportResponse(BaseModel):
    success: bool = True
    message: str
    status_sessao: Optional[str] = None
    sessao_id: Optional[str] = None
    servidor_timestamp: datetime
