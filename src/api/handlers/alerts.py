from typing import Optional

from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.use_cases.alerts import (
    CancelPanicCommand,
    CancelPanicResponse,
    CancelPanicUseCase,
    TriggerPanicCommand,
    TriggerPanicResponse,
    TriggerPanicUseCase,
)
from .context import ActionContext


class TriggerPanicRequest(BaseModel):
    device_id: Optional[str] = None
    tipo_acionamento: Optional[str] = Field(default=None, max_length=64)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    precisao_metros: Optional[float] = Field(default=None, ge=0)


class CancelPanicRequest(BaseModel):
    tipo_cancelamento: Optional[str] = Field(default=None, max_length=64)
    motivo_cancelamento: Optional[str] = Field(default=None, max_length=500)


async def trigger_panic(ctx: ActionContext) -> TriggerPanicResponse:
    request = TriggerPanicRequest.model_validate(ctx.body)
    command = TriggerPanicCommand(
        device_id=request.device_id,
        trigger_type=request.tipo_acionamento or "botao_panico",
        latitude=request.latitude,
        longitude=request.longitude,
        accuracy_m=request.precisao_metros,
        ip_address=ctx.ip_address,
    )
    result = await TriggerPanicUseCase(ctx.uow, ctx.dispatcher).execute(ctx.caller, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def cancel_panic(ctx: ActionContext) -> CancelPanicResponse:
    request = CancelPanicRequest.model_validate(ctx.body)
    command = CancelPanicCommand(
        cancel_type=request.tipo_cancelamento or "manual",
        reason=request.motivo_cancelamento,
        ip_address=ctx.ip_address,
    )
    result = await CancelPanicUseCase(ctx.uow, ctx.dispatcher).execute(ctx.caller, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
