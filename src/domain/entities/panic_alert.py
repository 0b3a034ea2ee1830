"""
PanicAlert Entity

Active-emergency record identified by a human-readable protocol code.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import AlertStatus


class PanicAlert(SQLModel, table=True):
    """
    PanicAlert entity - ativo -> cancelado (terminal).

    Business Rules:
    - At most one ativo alert per identity (partial unique index)
    - Protocol code format AMP-YYYYMMDD-XXXXXX
    - Cancellation is one-shot; escalated = elapsed > escalation window
    """

    __tablename__ = "alertas_panico"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)
    device_id: Optional[str] = Field(default=None, max_length=128)

    status: AlertStatus = Field(default=AlertStatus.ativo)
    protocol: str = Field(unique=True, max_length=32)
    trigger_type: str = Field(default="botao_panico", max_length=64)

    latitude: Optional[float] = None
    longitude: Optional[float] = None

    guardians_notified: bool = Field(default=False)
    authorities_dispatched: bool = Field(default=False)

    # Cancellation metadata
    cancel_type: Optional[str] = Field(default=None, max_length=64)
    cancel_reason: Optional[str] = Field(default=None, max_length=500)
    elapsed_seconds: Optional[int] = None
    escalated: Optional[bool] = None
    window_sealed: bool = Field(default=False)
    sealed_window_id: Optional[UUID] = None

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    cancelled_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_alertas_panico_one_active",
            "user_id",
            unique=True,
            sqlite_where=text("status = 'ativo'"),
            postgresql_where=text("status = 'ativo'"),
        ),
    )
