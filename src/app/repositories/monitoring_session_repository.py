from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import MonitoringSession


class IMonitoringSessionRepository(ABC):
    """Monitoring session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[MonitoringSession]:
        """Get monitoring session by ID"""
        pass

    @abstractmethod
    async def get_active(
        self, user_id: UUID, device_id: Optional[str] = None
    ) -> Optional[MonitoringSession]:
        """Get the ativa session for (user, device), or the newest for the user"""
        pass

    @abstractmethod
    async def create_if_absent(
        self, session: MonitoringSession
    ) -> Tuple[MonitoringSession, bool]:
        """
        Insert an ativa session unless (user, device) already has one.

        Returns:
            (session, created) - the existing ativa session and False on conflict
        """
        pass

    @abstractmethod
    async def seal_active(
        self,
        user_id: UUID,
        reason: str,
        now: datetime,
        device_id: Optional[str] = None,
        total_segments: Optional[int] = None,
    ) -> List[UUID]:
        """Move ativa sessions to aguardando_finalizacao. Returns sealed IDs."""
        pass

    @abstractmethod
    async def delete(self, session_id: UUID) -> bool:
        """Delete a session row outright"""
        pass
