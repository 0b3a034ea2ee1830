from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.use_cases.telemetry import (
    AudioSignedUrlUseCase,
    PingCommand,
    PingResponse,
    PingUseCase,
    ReceiveAudioCommand,
    ReceiveAudioResponse,
    ReceiveAudioUseCase,
    ReprocessRecordingUseCase,
    ReprocessResponse,
    SendLocationCommand,
    SendLocationResponse,
    SendLocationUseCase,
    SignedUrlResponse,
)
from .context import ActionContext


class ReceiveAudioRequest(BaseModel):
    """JSON or multipart fields; the binary arrives as the `audio` file part"""

    device_id: Optional[str] = None
    segmento_idx: Optional[int] = Field(default=None, ge=0)
    duracao_segundos: Optional[float] = Field(default=None, ge=0)
    tamanho_mb: Optional[float] = Field(default=None, ge=0)
    file_url: Optional[str] = None
    storage_path: Optional[str] = None


class SendLocationRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    device_id: Optional[str] = None
    alerta_id: Optional[str] = None
    precisao_metros: Optional[float] = Field(default=None, ge=0)
    bateria_percentual: Optional[int] = Field(default=None, ge=0, le=100)
    speed: Optional[float] = None
    heading: Optional[float] = None
    timestamp_gps: Optional[datetime] = None


class PingRequest(BaseModel):
    device_id: Optional[str] = None
    bateria_percentual: Optional[int] = Field(default=None, ge=0, le=100)
    is_charging: Optional[bool] = None
    is_recording: Optional[bool] = None
    is_monitoring: Optional[bool] = None
    dispositivo_info: Optional[str] = Field(default=None, max_length=255)
    versao_app: Optional[str] = Field(default=None, max_length=32)
    timezone: Optional[str] = Field(default=None, max_length=64)
    timezone_offset_minutes: Optional[int] = Field(default=None, ge=-840, le=840)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    precisao_metros: Optional[float] = Field(default=None, ge=0)
    speed: Optional[float] = None
    heading: Optional[float] = None


class SignedUrlRequest(BaseModel):
    file_path: Optional[str] = None
    gravacao_id: Optional[str] = None


class ReprocessRequest(BaseModel):
    gravacao_id: str = Field(..., min_length=1)


async def receive_audio(ctx: ActionContext) -> ReceiveAudioResponse:
    request = ReceiveAudioRequest.model_validate(ctx.body)
    command = ReceiveAudioCommand(
        device_id=request.device_id,
        segment_index=request.segmento_idx,
        duration_seconds=request.duracao_segundos,
        size_mb=request.tamanho_mb,
        storage_path=request.storage_path or request.file_url,
    )
    if ctx.upload is not None:
        command.payload = ctx.upload.data
        command.filename = ctx.upload.filename
        command.content_type = ctx.upload.content_type

    result = await ReceiveAudioUseCase(ctx.uow, ctx.storage, ctx.dispatcher).execute(
        ctx.caller, command
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def send_location(ctx: ActionContext) -> SendLocationResponse:
    request = SendLocationRequest.model_validate(ctx.body)
    command = SendLocationCommand(
        latitude=request.latitude,
        longitude=request.longitude,
        device_id=request.device_id,
        alert_id=request.alerta_id,
        accuracy_m=request.precisao_metros,
        battery_percent=request.bateria_percentual,
        speed=request.speed,
        heading=request.heading,
        captured_at=request.timestamp_gps,
    )
    result = await SendLocationUseCase(ctx.uow).execute(ctx.caller, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def ping(ctx: ActionContext) -> PingResponse:
    request = PingRequest.model_validate(ctx.body)
    command = PingCommand(
        device_id=request.device_id,
        battery_percent=request.bateria_percentual,
        is_charging=request.is_charging,
        is_recording=request.is_recording,
        is_monitoring=request.is_monitoring,
        device_info=request.dispositivo_info,
        app_version=request.versao_app,
        timezone=request.timezone,
        timezone_offset_minutes=request.timezone_offset_minutes,
        latitude=request.latitude,
        longitude=request.longitude,
        accuracy_m=request.precisao_metros,
        speed=request.speed,
        heading=request.heading,
    )
    result = await PingUseCase(ctx.uow).execute(ctx.caller, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def audio_signed_url(ctx: ActionContext) -> SignedUrlResponse:
    request = SignedUrlRequest.model_validate(ctx.body)
    result = await AudioSignedUrlUseCase(ctx.uow, ctx.signer).execute(
        ctx.caller, file_path=request.file_path, segment_id=request.gravacao_id
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def reprocess_recording(ctx: ActionContext) -> ReprocessResponse:
    request = ReprocessRequest.model_validate(ctx.body)
    result = await ReprocessRecordingUseCase(ctx.uow, ctx.dispatcher).execute(
        ctx.caller, request.gravacao_id
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
