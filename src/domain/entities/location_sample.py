"""
LocationSample Entity

GPS sample, linked to the ativo panic alert when one exists.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now


class LocationSample(SQLModel, table=True):
    __tablename__ = "localizacoes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)
    device_id: Optional[str] = Field(default=None, max_length=128)
    alert_id: Optional[UUID] = Field(default=None, foreign_key="alertas_panico.id", index=True)

    latitude: float
    longitude: float
    accuracy_m: Optional[float] = None
    speed: Optional[float] = None  # m/s as reported by the GPS
    heading: Optional[float] = None
    battery_percent: Optional[int] = None

    captured_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    received_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_localizacoes_user_captured", "user_id", "captured_at"),)
