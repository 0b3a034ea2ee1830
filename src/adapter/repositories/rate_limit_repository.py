from datetime import datetime

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.rate_limit_repository import IRateLimitRepository
from src.domain.entities import RateLimitAttempt


class RateLimitRepository(IRateLimitRepository):
    """Rate limit attempt repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def count_since(self, identifier: str, action_type: str, since: datetime) -> int:
        """Sliding-window count of attempts"""
        stmt = select(func.count(RateLimitAttempt.id)).where(
            RateLimitAttempt.identifier == identifier,
            RateLimitAttempt.action_type == action_type,
            RateLimitAttempt.attempted_at >= since,
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, attempt: RateLimitAttempt) -> RateLimitAttempt:
        """Append an attempt record"""
        self.session.add(attempt)
        await self.session.flush()
        return attempt
