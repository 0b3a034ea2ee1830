from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.support_network_repository import ISupportNetworkRepository
from src.domain.entities import Aggressor, Guardian


class SupportNetworkRepository(ISupportNetworkRepository):
    """Guardian and aggressor lookups using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_guardians(self, user_id: UUID) -> List[Guardian]:
        """Get guardians of a user, primary first"""
        stmt = (
            select(Guardian)
            .where(Guardian.user_id == user_id)
            .order_by(Guardian.is_primary.desc(), Guardian.name)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_aggressor(self, user_id: UUID) -> Optional[Aggressor]:
        """Get the registered aggressor of a user"""
        stmt = select(Aggressor).where(Aggressor.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.first()
