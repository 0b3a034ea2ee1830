from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.location_share_repository import ILocationShareRepository
from src.domain.entities import LocationShare


class LocationShareRepository(ILocationShareRepository):
    """Location sharing link repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_active_by_user(self, user_id: UUID) -> Optional[LocationShare]:
        """Get the active sharing link of a user"""
        stmt = (
            select(LocationShare)
            .where(LocationShare.user_id == user_id, LocationShare.active == True)  # noqa: E712
            .order_by(LocationShare.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, share: LocationShare) -> LocationShare:
        """Create a sharing link"""
        self.session.add(share)
        await self.session.flush()
        await self.session.refresh(share)
        return share

    async def deactivate_all(self, user_id: UUID, now: datetime) -> int:
        """Deactivate every active link of a user"""
        stmt = (
            update(LocationShare)
            .where(LocationShare.user_id == user_id, LocationShare.active == True)  # noqa: E712
            .values(active=False, deactivated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
