from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple
from uuid import UUID

from src.domain.entities import PanicAlert


class IPanicAlertRepository(ABC):
    """Panic alert repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, alert_id: UUID) -> Optional[PanicAlert]:
        """Get alert by ID"""
        pass

    @abstractmethod
    async def get_active_by_user(self, user_id: UUID) -> Optional[PanicAlert]:
        """Get the single ativo alert of a user, if any"""
        pass

    @abstractmethod
    async def create_if_absent(self, alert: PanicAlert) -> Tuple[PanicAlert, bool]:
        """
        Insert an ativo alert unless the user already has one.

        Returns:
            (alert, created) - the existing ativo alert and False on conflict
        """
        pass

    @abstractmethod
    async def cancel_if_active(self, alert_id: UUID, **values: Any) -> Optional[PanicAlert]:
        """
        Flip an alert to cancelado only while it is still ativo.

        Returns the refreshed alert, or None when it was no longer ativo.
        """
        pass

    @abstractmethod
    async def update(self, alert: PanicAlert) -> PanicAlert:
        """Update existing alert"""
        pass
