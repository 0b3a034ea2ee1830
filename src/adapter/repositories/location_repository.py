from typing import List
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.location_repository import ILocationRepository
from src.domain.entities import LocationSample


class LocationRepository(ILocationRepository):
    """Location sample repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, sample: LocationSample) -> LocationSample:
        """Store a location sample"""
        self.session.add(sample)
        await self.session.flush()
        await self.session.refresh(sample)
        return sample

    async def get_recent_by_user(self, user_id: UUID, limit: int = 3) -> List[LocationSample]:
        """Newest samples, returned in chronological order"""
        stmt = (
            select(LocationSample)
            .where(LocationSample.user_id == user_id)
            .order_by(LocationSample.captured_at.desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(reversed(result.all()))
