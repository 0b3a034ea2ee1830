from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Aggressor, Guardian


class ISupportNetworkRepository(ABC):
    """Guardian and aggressor lookups - application layer"""

    @abstractmethod
    async def get_guardians(self, user_id: UUID) -> List[Guardian]:
        """Get guardians of a user, primary first"""
        pass

    @abstractmethod
    async def get_aggressor(self, user_id: UUID) -> Optional[Aggressor]:
        """Get the registered aggressor of a user, if any"""
        pass
