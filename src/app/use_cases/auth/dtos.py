"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the session/credential actions.
Field names follow the mobile wire contract.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Identity


# ============================================================================
# Command DTOs
# ============================================================================


class LoginCommand(BaseModel):
    """Validated login intent"""

    email: str
    password: str
    ip_address: Optional[str] = None
    action_type: Optional[str] = None


class ChangePasswordCommand(BaseModel):
    """Change of the normal or the coercion password"""

    current_password: str
    new_password: str
    ip_address: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserSummary(BaseModel):
    """Identity fields exposed to the device"""

    id: str
    email: str
    nome_completo: Optional[str] = None
    telefone: Optional[str] = None
    tipo_interesse: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_identity(cls, identity: Identity, with_status: bool = False) -> "UserSummary":
        return cls(
            id=str(identity.id),
            email=identity.email,
            nome_completo=identity.full_name,
            telefone=identity.phone,
            tipo_interesse=identity.interest_type,
            status=identity.status.value if with_status else None,
        )


class SessionInfo(BaseModel):
    token: str
    expires_at: datetime


class LoginResponse(BaseModel):
    """Response for login; loginTipo is normal or coacao"""

    success: bool = True
    usuario: UserSummary
    loginTipo: str
    session: SessionInfo
    refresh_token: str


class RefreshTokenResponse(BaseModel):
    """Response for refresh token rotation"""

    success: bool = True
    access_token: str
    refresh_token: str
    expires_at: datetime
    user: UserSummary


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ValidatePasswordResponse(BaseModel):
    success: bool = True
    loginTipo: str
