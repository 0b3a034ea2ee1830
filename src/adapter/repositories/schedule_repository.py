from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.schedule_repository import IScheduleRepository
from src.domain.entities import MonitoringSchedule


class ScheduleRepository(IScheduleRepository):
    """Monitoring schedule repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user(self, user_id: UUID) -> Optional[MonitoringSchedule]:
        """Get the weekly schedule of a user"""
        stmt = select(MonitoringSchedule).where(MonitoringSchedule.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def save(self, schedule: MonitoringSchedule) -> MonitoringSchedule:
        """Create or replace a schedule"""
        self.session.add(schedule)
        await self.session.flush()
        await self.session.refresh(schedule)
        return schedule
