"""
Monitoring session lifecycle.

ativa -> aguardando_finalizacao -> finalized (external sweep) | deleted
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Tuple
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import MonitoringSession, MonitoringStatus, SessionOrigin

logger = logging.getLogger(__name__)

PANIC_CANCELLED_REASON = "panico_cancelado"

# Stop reasons that seal right away instead of waiting for the batch sweep
IMMEDIATE_SEAL_REASONS = frozenset(
    {"botao_manual", "manual", "botao_panico", "panico", "comando_voz_parar"}
)


@dataclass
class FinalizeOutcome:
    status: str
    session_id: Optional[UUID] = None
    orphaned_keys: List[str] = field(default_factory=list)


class MonitoringScheduler:
    """Runs inside a unit of work the caller has already entered; never commits."""

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def ensure_active_session(
        self,
        user_id: UUID,
        device_id: str,
        origin: SessionOrigin,
        window_start_utc: Optional[datetime] = None,
        window_end_utc: Optional[datetime] = None,
    ) -> Tuple[MonitoringSession, bool]:
        """Return the ativa session for (user, device), creating it if needed."""
        session, created = await self.uow.monitoring_sessions.create_if_absent(
            MonitoringSession(
                user_id=user_id,
                device_id=device_id,
                origin=origin,
                status=MonitoringStatus.ativa,
                window_start_utc=window_start_utc or self.clock(),
                window_end_utc=window_end_utc,
                created_at=self.clock(),
            )
        )
        if created:
            logger.info(
                "Monitoring session started",
                extra={"session_id": str(session.id), "origin": origin.value},
            )
        return session, created

    async def seal(
        self,
        user_id: UUID,
        reason: str,
        device_id: Optional[str] = None,
        total_segments: Optional[int] = None,
    ) -> List[UUID]:
        sealed = await self.uow.monitoring_sessions.seal_active(
            user_id, reason, self.clock(), device_id=device_id, total_segments=total_segments
        )
        if sealed:
            logger.info(
                "Monitoring sessions sealed",
                extra={"count": len(sealed), "reason": reason},
            )
        return sealed

    async def finalize(
        self,
        user_id: UUID,
        device_id: Optional[str],
        total_segments: Optional[int],
        reason: Optional[str],
    ) -> FinalizeOutcome:
        """
        Handle a reported recording stop.

        Zero segments deletes the session and its orphaned rows; the caller
        removes the returned object keys after commit.
        """
        session = await self.uow.monitoring_sessions.get_active(user_id, device_id)
        if session is None:
            return FinalizeOutcome(status="sem_sessao")

        if total_segments == 0:
            segments = await self.uow.audio_segments.list_by_session(session.id)
            await self.uow.audio_segments.delete_by_session(session.id)
            await self.uow.monitoring_sessions.delete(session.id)
            return FinalizeOutcome(
                status=MonitoringStatus.deleted.value,
                session_id=session.id,
                orphaned_keys=[s.storage_key for s in segments],
            )

        if reason in IMMEDIATE_SEAL_REASONS:
            await self.seal(user_id, reason, device_id=session.device_id, total_segments=total_segments)
            return FinalizeOutcome(
                status=MonitoringStatus.aguardando_finalizacao.value, session_id=session.id
            )

        return FinalizeOutcome(status=MonitoringStatus.ativa.value, session_id=session.id)
