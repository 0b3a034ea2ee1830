"""
MonitoringSchedule Entity

Weekly recording windows of one identity.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, JSON, SQLModel

from ..base import utc_now


class MonitoringSchedule(SQLModel, table=True):
    """
    MonitoringSchedule entity - {"seg": [{"inicio": "08:00", "fim": "12:00"}], ...}

    Business Rules:
    - One schedule per identity
    - Intervals per day are disjoint, sorted, start < end, <= 8h total
    - Always replaced as a whole (JSON column)
    """

    __tablename__ = "agendamentos_monitoramento"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="usuarios.id", unique=True, nullable=False)
    periods: dict = Field(default_factory=dict, sa_column=Column(JSON))

    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
