"""
Telemetry Use Case DTOs

Audio segments, GPS samples and device heartbeats.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ============================================================================
# Command DTOs
# ============================================================================


class ReceiveAudioCommand(BaseModel):
    device_id: Optional[str] = None
    segment_index: Optional[int] = Field(default=None, ge=0)
    duration_seconds: Optional[float] = None
    size_mb: Optional[float] = None
    storage_path: Optional[str] = None
    payload: Optional[bytes] = None
    filename: Optional[str] = None
    content_type: Optional[str] = None


class SendLocationCommand(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    device_id: Optional[str] = None
    alert_id: Optional[str] = None
    accuracy_m: Optional[float] = Field(default=None, ge=0)
    battery_percent: Optional[int] = Field(default=None, ge=0, le=100)
    speed: Optional[float] = None
    heading: Optional[float] = None
    captured_at: Optional[datetime] = None


class PingCommand(BaseModel):
    device_id: Optional[str] = None
    battery_percent: Optional[int] = Field(default=None, ge=0, le=100)
    is_charging: Optional[bool] = None
    is_recording: Optional[bool] = None
    is_monitoring: Optional[bool] = None
    device_info: Optional[str] = None
    app_version: Optional[str] = None
    timezone: Optional[str] = None
    timezone_offset_minutes: Optional[int] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    accuracy_m: Optional[float] = None
    speed: Optional[float] = None
    heading: Optional[float] = None


# ============================================================================
# Response DTOs
# ============================================================================


class ReceiveAudioResponse(BaseModel):
    success: bool = True
    segmento_id: str
    monitor_session_id: str
    storage_path: str
    duplicado: bool = False
    message: str


class SendLocationResponse(BaseModel):
    success: bool = True
    message: str
    alerta_id: Optional[str] = None
    movimento: Optional[str] = None
    servidor_timestamp: datetime


class PingResponse(BaseModel):
    success: bool = True
    status: str
    servidor_timestamp: datetime


class SignedUrlResponse(BaseModel):
    success: bool = True
    signed_url: str
    gravacao_id: Optional[str] = None
    storage_path: str
    expires_in_seconds: int


class ReprocessResponse(BaseModel):
    success: bool = True
    gravacao_id: str
    message: str
    status: str
