"""
Identity Entity

Represents a protected person who signs in from the mobile app.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import IdentityStatus


class Identity(SQLModel, table=True):
    """
    Identity entity - account holding a normal and an optional duress password.

    Business Rules:
    - Email is unique and stored lower-cased
    - Passwords stored as bcrypt hashes
    - duress_password_hash must never verify the normal password
    - Password fields change only through the duress-aware mutation policy
    """

    __tablename__ = "usuarios"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)
    duress_password_hash: Optional[str] = Field(default=None, max_length=60)

    status: IdentityStatus = Field(default=IdentityStatus.ativo)

    # Profile
    full_name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    interest_type: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    last_access_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_usuarios_status", "status"),)
