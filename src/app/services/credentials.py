"""
Caller credentials.

A request authenticates with a session token or, for some device actions,
with the bare account e-mail (legacy mode). Each action declares which
variants it accepts.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Union
from uuid import UUID


class AuthStrength(str, Enum):
    session = "session"
    legacy_identifier = "legacy_identifier"


@dataclass(frozen=True)
class SessionTokenCredential:
    token: str


@dataclass(frozen=True)
class LegacyIdentifierCredential:
    email: str


Credential = Union[SessionTokenCredential, LegacyIdentifierCredential]

SESSION_ONLY: FrozenSet[type] = frozenset({SessionTokenCredential})
SESSION_OR_LEGACY: FrozenSet[type] = frozenset(
    {SessionTokenCredential, LegacyIdentifierCredential}
)


@dataclass(frozen=True)
class Caller:
    """Resolved identity snapshot; plain values only, safe outside the unit of work."""

    user_id: UUID
    email: str
    strength: AuthStrength
    session_id: Optional[UUID] = None
    session_token: Optional[str] = None

    def audit_metadata(self) -> dict:
        return {"auth_strength": self.strength.value}
