"""
LocationShare Entity

Public tracking link opened while a panic alert is active.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utc_now


class LocationShare(SQLModel, table=True):
    __tablename__ = "compartilhamento_gps"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)
    alert_id: Optional[UUID] = Field(default=None, foreign_key="alertas_panico.id")

    code: str = Field(unique=True, index=True, max_length=16)
    active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    deactivated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
