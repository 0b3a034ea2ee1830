"""
MonitoringSession Entity

A bounded recording period tied to one device.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import MonitoringStatus, SessionOrigin


class MonitoringSession(SQLModel, table=True):
    """
    MonitoringSession entity - ativa -> aguardando_finalizacao -> finalized | deleted.

    Business Rules:
    - At most one ativa session per (user, device) (partial unique index)
    - Window bounds are UTC; explicit starts may have no scheduled end
    - Sealing records the reason and closed_at
    """

    __tablename__ = "monitoramento_sessoes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)
    device_id: str = Field(max_length=128)

    status: MonitoringStatus = Field(default=MonitoringStatus.ativa)
    origin: SessionOrigin = Field(default=SessionOrigin.automatico)

    window_start_utc: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    window_end_utc: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    sealed_reason: Optional[str] = Field(default=None, max_length=64)
    total_segments: Optional[int] = None

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    closed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_monitoramento_one_active",
            "user_id",
            "device_id",
            unique=True,
            sqlite_where=text("status = 'ativa'"),
            postgresql_where=text("status = 'ativa'"),
        ),
    )
