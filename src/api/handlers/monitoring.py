from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.use_cases.monitoring import (
    MonitoringStatusCommand,
    RecordingStatusCommand,
    ReportMonitoringStatusUseCase,
    ReportRecordingStatusUseCase,
    StatusReportResponse,
    SyncConfigCommand,
    SyncConfigResponse,
    SyncConfigUseCase,
    UpdateSchedulesResponse,
    UpdateSchedulesUseCase,
)
from src.app.use_cases.monitoring.dtos import (
    MonitoringStatusReport,
    RecordingOrigin,
    RecordingStatusReport,
)
from .context import ActionContext


class SyncConfigRequest(BaseModel):
    device_id: Optional[str] = None
    timezone: Optional[str] = Field(default=None, max_length=64)
    timezone_offset_minutes: Optional[int] = Field(default=None, ge=-840, le=840)


class UpdateSchedulesRequest(BaseModel):
    periodos_semana: Dict[str, Optional[List[dict]]]


class MonitoringStatusRequest(BaseModel):
    device_id: str = Field(..., min_length=1)
    status_monitoramento: MonitoringStatusReport
    motivo: Optional[str] = Field(default=None, max_length=64)
    app_state: Optional[str] = None


class RecordingStatusRequest(BaseModel):
    device_id: Optional[str] = None
    status_gravacao: RecordingStatusReport
    origem_gravacao: Optional[RecordingOrigin] = None
    motivo_parada: Optional[str] = Field(default=None, max_length=64)
    total_segmentos: Optional[int] = Field(default=None, ge=0)


async def sync_config(ctx: ActionContext) -> SyncConfigResponse:
    request = SyncConfigRequest.model_validate(ctx.body)
    result = await SyncConfigUseCase(ctx.uow).execute(
        ctx.caller, SyncConfigCommand(**request.model_dump())
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def update_schedules(ctx: ActionContext) -> UpdateSchedulesResponse:
    request = UpdateSchedulesRequest.model_validate(ctx.body)
    result = await UpdateSchedulesUseCase(ctx.uow).execute(ctx.caller, request.periodos_semana)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def report_monitoring_status(ctx: ActionContext) -> StatusReportResponse:
    request = MonitoringStatusRequest.model_validate(ctx.body)
    command = MonitoringStatusCommand(
        device_id=request.device_id,
        status=request.status_monitoramento,
        reason=request.motivo,
        app_state=request.app_state,
    )
    result = await ReportMonitoringStatusUseCase(ctx.uow).execute(ctx.caller, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def report_recording_status(ctx: ActionContext) -> StatusReportResponse:
    request = RecordingStatusRequest.model_validate(ctx.body)
    command = RecordingStatusCommand(
        device_id=request.device_id,
        status=request.status_gravacao,
        origin=request.origem_gravacao or "botao_manual",
        stop_reason=request.motivo_parada,
        total_segments=request.total_segmentos,
    )
    result = await ReportRecordingStatusUseCase(ctx.uow, ctx.storage).execute(
        ctx.caller, command
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
