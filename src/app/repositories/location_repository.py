from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import LocationSample


class ILocationRepository(ABC):
    """Location sample repository interface - application layer"""

    @abstractmethod
    async def create(self, sample: LocationSample) -> LocationSample:
        """Store a location sample"""
        pass

    @abstractmethod
    async def get_recent_by_user(self, user_id: UUID, limit: int = 3) -> List[LocationSample]:
        """Get the newest samples of a user, oldest first"""
        pass
