from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.domain.entities import RefreshToken


class RefreshTokenRepository(IRefreshTokenRepository):
    """Refresh token repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: RefreshToken) -> RefreshToken:
        """Create a new refresh token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_id(self, token_id: UUID) -> Optional[RefreshToken]:
        """Get refresh token by ID"""
        stmt = select(RefreshToken).where(RefreshToken.id == token_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token_hash(self, token_hash: str) -> Optional[RefreshToken]:
        """Get refresh token by hash"""
        stmt = select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def claim_for_rotation(self, token_id: UUID, now: datetime) -> bool:
        """Conditional revoke: only one concurrent rotation can win"""
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.id == token_id, RefreshToken.revoked_at.is_(None))
            .values(revoked_at=now)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def set_replaced_by(self, token_id: UUID, successor_id: UUID) -> None:
        """Link a rotated token to its successor"""
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.id == token_id)
            .values(replaced_by=successor_id)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def revoke_descendants(self, token_id: UUID, now: datetime) -> int:
        """Walk the replaced_by chain and revoke every live successor"""
        revoked = 0
        seen = set()
        current = await self.get_by_id(token_id)
        while current is not None and current.replaced_by is not None:
            if current.replaced_by in seen:
                break
            seen.add(current.replaced_by)
            successor = await self.get_by_id(current.replaced_by)
            if successor is None:
                break
            if successor.revoked_at is None:
                successor.revoked_at = now
                self.session.add(successor)
                revoked += 1
            current = successor
        await self.session.flush()
        return revoked
