"""
AccessSession Entity

Stores hashed session (access) tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now


class AccessSession(SQLModel, table=True):
    """
    AccessSession entity - one issued session token.

    Business Rules:
    - Only the SHA-256 hash of the token is stored
    - Expires 24 hours after issuance
    - Revocation is a timestamp and is never undone
    """

    __tablename__ = "user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)

    token_hash: str = Field(unique=True, max_length=64)
    ip_address: Optional[str] = Field(default=None, max_length=64)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_sessions_expires_at", "expires_at"),)

    def is_live(self, now: datetime) -> bool:
        return self.revoked_at is None and self.expires_at > now
