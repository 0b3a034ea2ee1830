from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import RefreshToken


class IRefreshTokenRepository(ABC):
    """Refresh token repository interface - application layer"""

    @abstractmethod
    async def create(self, token: RefreshToken) -> RefreshToken:
        """Create a new refresh token"""
        pass

    @abstractmethod
    async def get_by_id(self, token_id: UUID) -> Optional[RefreshToken]:
        """Get refresh token by ID"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[RefreshToken]:
        """Get refresh token by hash, whatever its state"""
        pass

    @abstractmethod
    async def claim_for_rotation(self, token_id: UUID, now: datetime) -> bool:
        """
        Revoke the token only if it is still unrevoked (single statement).

        Returns False when another rotation already claimed it.
        """
        pass

    @abstractmethod
    async def set_replaced_by(self, token_id: UUID, successor_id: UUID) -> None:
        """Link a rotated token to its successor"""
        pass

    @abstractmethod
    async def revoke_descendants(self, token_id: UUID, now: datetime) -> int:
        """Revoke every token reachable through replaced_by. Returns count."""
        pass
