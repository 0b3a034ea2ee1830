from abc import ABC, abstractmethod
from typing import Any, Optional
from uuid import UUID

from src.domain.entities import DeviceStatus


class IDeviceStatusRepository(ABC):
    """Device liveness repository interface - application layer"""

    @abstractmethod
    async def get(self, user_id: UUID, device_id: str) -> Optional[DeviceStatus]:
        """Get the liveness record of a device"""
        pass

    @abstractmethod
    async def upsert(self, user_id: UUID, device_id: str, **fields: Any) -> DeviceStatus:
        """Create or update the liveness record with the given fields"""
        pass
