"""
Support Network Entities

Guardians receive panic notifications; the aggressor record feeds the
emergency-voice context with optional descriptors.
"""

from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Guardian(SQLModel, table=True):
    __tablename__ = "guardioes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)
    name: str = Field(max_length=255)
    whatsapp_phone: str = Field(max_length=32)
    relation: Optional[str] = Field(default=None, max_length=64)
    is_primary: bool = Field(default=False)


class Aggressor(SQLModel, table=True):
    """
    Aggressor entity - descriptors only, never asserted as confirmed facts.
    """

    __tablename__ = "agressores"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="usuarios.id", nullable=False, index=True)

    name_masked: Optional[str] = Field(default=None, max_length=255)
    relation_type: Optional[str] = Field(default=None, max_length=64)
    relation_status: Optional[str] = Field(default=None, max_length=64)
    risk_level: Optional[str] = Field(default=None, max_length=32)

    vehicle_model: Optional[str] = Field(default=None, max_length=64)
    vehicle_color: Optional[str] = Field(default=None, max_length=32)
    vehicle_plate_partial: Optional[str] = Field(default=None, max_length=16)
