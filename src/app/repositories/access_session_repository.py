from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import AccessSession


class IAccessSessionRepository(ABC):
    """Access session repository interface - application layer"""

    @abstractmethod
    async def create(self, session: AccessSession) -> AccessSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[AccessSession]:
        """Get session by token hash, whatever its state"""
        pass

    @abstractmethod
    async def revoke_by_token_hash(self, token_hash: str, now: datetime) -> bool:
        """Revoke a session if still unrevoked. Returns True if a row changed."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Revoke every unrevoked session of a user. Returns count."""
        pass
