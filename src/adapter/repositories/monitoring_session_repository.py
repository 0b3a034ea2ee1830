from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.monitoring_session_repository import (
    IMonitoringSessionRepository,
)
from src.domain.entities import MonitoringSession, MonitoringStatus


class MonitoringSessionRepository(IMonitoringSessionRepository):
    """Monitoring session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[MonitoringSession]:
        """Get monitoring session by ID"""
        stmt = select(MonitoringSession).where(MonitoringSession.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active(
        self, user_id: UUID, device_id: Optional[str] = None
    ) -> Optional[MonitoringSession]:
        """Get the ativa session for (user, device), newest first without device"""
        stmt = select(MonitoringSession).where(
            MonitoringSession.user_id == user_id,
            MonitoringSession.status == MonitoringStatus.ativa,
        )
        if device_id:
            stmt = stmt.where(MonitoringSession.device_id == device_id)
        stmt = stmt.order_by(MonitoringSession.created_at.desc())
        result = await self.session.exec(stmt)
        return result.first()

    async def create_if_absent(
        self, session_obj: MonitoringSession
    ) -> Tuple[MonitoringSession, bool]:
        """
        Insert inside a SAVEPOINT; the partial unique index on ativa sessions
        turns a concurrent duplicate into "return the existing one".
        """
        existing = await self.get_active(session_obj.user_id, session_obj.device_id)
        if existing is not None:
            return existing, False

        try:
            async with self.session.begin_nested():
                self.session.add(session_obj)
                await self.session.flush()
        except IntegrityError:
            existing = await self.get_active(session_obj.user_id, session_obj.device_id)
            if existing is None:
                raise
            return existing, False

        await self.session.refresh(session_obj)
        return session_obj, True

    async def seal_active(
        self,
        user_id: UUID,
        reason: str,
        now: datetime,
        device_id: Optional[str] = None,
        total_segments: Optional[int] = None,
    ) -> List[UUID]:
        """Seal ativa sessions with a conditional UPDATE"""
        conditions = [
            MonitoringSession.user_id == user_id,
            MonitoringSession.status == MonitoringStatus.ativa,
        ]
        if device_id:
            conditions.append(MonitoringSession.device_id == device_id)

        ids_stmt = select(MonitoringSession.id).where(*conditions)
        candidate_ids = list((await self.session.exec(ids_stmt)).all())
        if not candidate_ids:
            return []

        values = {
            "status": MonitoringStatus.aguardando_finalizacao,
            "sealed_reason": reason,
            "closed_at": now,
        }
        if total_segments is not None:
            values["total_segments"] = total_segments

        stmt = (
            update(MonitoringSession)
            .where(
                MonitoringSession.id.in_(candidate_ids),
                MonitoringSession.status == MonitoringStatus.ativa,
            )
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return candidate_ids

    async def delete(self, session_id: UUID) -> bool:
        """Delete a session row outright"""
        stmt = (
            delete(MonitoringSession)
            .where(MonitoringSession.id == session_id)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
