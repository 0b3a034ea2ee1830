"""
RefreshToken Entity

Single-use refresh credentials forming a rotation chain.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now


class RefreshToken(SQLModel, table=True):
    """
    RefreshToken entity - one link of a rotation chain.

    Business Rules:
    - Only the SHA-256 hash of the token is stored
    - Absolute expiry of 30 days, never extended
    - Rotation revokes the token and points replaced_by at its successor
    """

    __tablename__ = "refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)

    token_hash: str = Field(unique=True, max_length=64)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    replaced_by: Optional[UUID] = Field(default=None, foreign_key="refresh_tokens.id")

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_refresh_tokens_expires_at", "expires_at"),)
