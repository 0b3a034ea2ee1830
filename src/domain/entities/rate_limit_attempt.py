"""
RateLimitAttempt Entity

Append-only log read through sliding-window counts.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now


class RateLimitAttempt(SQLModel, table=True):
    __tablename__ = "rate_limit_attempts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    identifier: str = Field(max_length=320)
    action_type: str = Field(max_length=64)
    attempted_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_rate_limit_lookup", "identifier", "action_type", "attempted_at"),
    )
