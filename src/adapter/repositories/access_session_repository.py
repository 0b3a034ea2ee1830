from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.access_session_repository import IAccessSessionRepository
from src.domain.entities import AccessSession


class AccessSessionRepository(IAccessSessionRepository):
    """Access session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session_obj: AccessSession) -> AccessSession:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def get_by_token_hash(self, token_hash: str) -> Optional[AccessSession]:
        """Get session by token hash"""
        stmt = select(AccessSession).where(AccessSession.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def revoke_by_token_hash(self, token_hash: str, now: datetime) -> bool:
        """Revoke a session by token hash, only if not yet revoked"""
        stmt = (
            update(AccessSession)
            .where(
                AccessSession.token_hash == token_hash,
                AccessSession.revoked_at.is_(None),
            )
            .values(revoked_at=now)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Revoke all unrevoked sessions for a user"""
        stmt = (
            update(AccessSession)
            .where(
                AccessSession.user_id == user_id,
                AccessSession.revoked_at.is_(None),
            )
            .values(revoked_at=now)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
