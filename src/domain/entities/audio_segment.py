"""
AudioSegment Entity

One ordinal chunk of a monitoring session's audio.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel, UniqueConstraint

from ..base import utc_now


class AudioSegment(SQLModel, table=True):
    """
    AudioSegment entity - metadata row for a stored audio object.

    Business Rules:
    - (monitor_session_id, segment_index) is unique when the index is present
    - The object is stored before this row is written
    """

    __tablename__ = "gravacoes_segmentos"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    monitor_session_id: UUID = Field(
        foreign_key="monitoramento_sessoes.id", nullable=False, index=True
    )
    user_id: UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)
    device_id: Optional[str] = Field(default=None, max_length=128)

    segment_index: Optional[int] = None
    storage_key: str = Field(max_length=512)
    duration_seconds: Optional[float] = None
    size_mb: Optional[float] = None

    received_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint(
            "monitor_session_id", "segment_index", name="uq_segment_session_index"
        ),
    )
