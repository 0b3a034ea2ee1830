from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Identity


class IIdentityRepository(ABC):
    """Identity repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[Identity]:
        """Get identity by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Identity]:
        """Get identity by (lower-cased) email"""
        pass

    @abstractmethod
    async def update(self, identity: Identity) -> Identity:
        """Update existing identity"""
        pass
