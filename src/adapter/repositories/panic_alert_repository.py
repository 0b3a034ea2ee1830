from typing import Any, Optional, Tuple
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.panic_alert_repository import IPanicAlertRepository
from src.domain.entities import AlertStatus, PanicAlert


class PanicAlertRepository(IPanicAlertRepository):
    """Panic alert repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, alert_id: UUID) -> Optional[PanicAlert]:
        """Get alert by ID"""
        stmt = select(PanicAlert).where(PanicAlert.id == alert_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_user(self, user_id: UUID) -> Optional[PanicAlert]:
        """Get the ativo alert of a user"""
        stmt = select(PanicAlert).where(
            PanicAlert.user_id == user_id, PanicAlert.status == AlertStatus.ativo
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create_if_absent(self, alert: PanicAlert) -> Tuple[PanicAlert, bool]:
        """
        Insert inside a SAVEPOINT; the partial unique index on ativo alerts
        turns a concurrent duplicate into "return the existing one".
        """
        existing = await self.get_active_by_user(alert.user_id)
        if existing is not None:
            return existing, False

        try:
            async with self.session.begin_nested():
                self.session.add(alert)
                await self.session.flush()
        except IntegrityError:
            existing = await self.get_active_by_user(alert.user_id)
            if existing is None:
                raise
            return existing, False

        await self.session.refresh(alert)
        return alert, True

    async def cancel_if_active(self, alert_id: UUID, **values: Any) -> Optional[PanicAlert]:
        """Single conditional UPDATE guarded by status = ativo"""
        stmt = (
            update(PanicAlert)
            .where(PanicAlert.id == alert_id, PanicAlert.status == AlertStatus.ativo)
            .values(status=AlertStatus.cancelado, **values)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount == 0:
            return None

        alert = await self.get_by_id(alert_id)
        await self.session.refresh(alert)
        return alert

    async def update(self, alert: PanicAlert) -> PanicAlert:
        """Update existing alert"""
        self.session.add(alert)
        await self.session.flush()
        await self.session.refresh(alert)
        return alert
