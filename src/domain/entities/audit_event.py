"""
AuditEvent Entity

Immutable log of security-relevant events, including silent coercion events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utc_now


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of account and safety events.

    Business Rules:
    - Immutable (never updated or deleted)
    - Coercion events use actions prefixed with "coacao_" and carry {"silent": true}
    - Metadata stores additional context (auth mode, session ids, protocol)
    """

    __tablename__ = "audit_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: Optional[UUID] = Field(default=None, index=True)
    action: str = Field(max_length=100)  # e.g., "login_mobile_success", "coacao_login"
    success: bool = Field(default=True)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_user_action", "user_id", "action"),
    )
