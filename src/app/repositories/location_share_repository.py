from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import LocationShare


class ILocationShareRepository(ABC):
    """Location sharing link repository interface - application layer"""

    @abstractmethod
    async def get_active_by_user(self, user_id: UUID) -> Optional[LocationShare]:
        """Get the active sharing link of a user, if any"""
        pass

    @abstractmethod
    async def create(self, share: LocationShare) -> LocationShare:
        """Create a sharing link"""
        pass

    @abstractmethod
    async def deactivate_all(self, user_id: UUID, now: datetime) -> int:
        """Deactivate every active link of a user. Returns count."""
        pass
