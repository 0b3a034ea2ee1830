"""
DeviceStatus Entity

Per-device liveness record refreshed by heartbeats.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel, UniqueConstraint

from .enums import DeviceConnectivity


class DeviceStatus(SQLModel, table=True):
    __tablename__ = "device_status"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)
    device_id: str = Field(max_length=128)

    status: DeviceConnectivity = Field(default=DeviceConnectivity.online)
    last_ping_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    battery_percent: Optional[int] = None
    is_charging: Optional[bool] = None
    is_recording: Optional[bool] = None
    is_monitoring: Optional[bool] = None
    device_info: Optional[str] = Field(default=None, max_length=255)
    app_version: Optional[str] = Field(default=None, max_length=32)
    timezone: Optional[str] = Field(default=None, max_length=64)
    timezone_offset_minutes: Optional[int] = None

    __table_args__ = (UniqueConstraint("user_id", "device_id", name="uq_device_status_user_device"),)
