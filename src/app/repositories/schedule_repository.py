from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import MonitoringSchedule


class IScheduleRepository(ABC):
    """Monitoring schedule repository interface - application layer"""

    @abstractmethod
    async def get_by_user(self, user_id: UUID) -> Optional[MonitoringSchedule]:
        """Get the weekly schedule of a user"""
        pass

    @abstractmethod
    async def save(self, schedule: MonitoringSchedule) -> MonitoringSchedule:
        """Create or replace a schedule"""
        pass
