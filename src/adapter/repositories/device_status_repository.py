from typing import Any, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.device_status_repository import IDeviceStatusRepository
from src.domain.entities import DeviceStatus


class DeviceStatusRepository(IDeviceStatusRepository):
    """Device liveness repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: UUID, device_id: str) -> Optional[DeviceStatus]:
        """Get the liveness record of a device"""
        stmt = select(DeviceStatus).where(
            DeviceStatus.user_id == user_id, DeviceStatus.device_id == device_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def upsert(self, user_id: UUID, device_id: str, **fields: Any) -> DeviceStatus:
        """Create or update; None values leave the stored field untouched"""
        record = await self.get(user_id, device_id)
        if record is None:
            record = DeviceStatus(user_id=user_id, device_id=device_id)

        for name, value in fields.items():
            if value is not None:
                setattr(record, name, value)

        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record
