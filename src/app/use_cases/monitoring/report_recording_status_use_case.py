"""
Report Recording Status Use Case

Client-side recording lifecycle. A finalized recording with zero
segments is removed outright instead of being handed off.
"""

import logging
from datetime import datetime
from typing import Callable

from libs.result import Error, Result, Return
from src.app.services.credentials import Caller
from src.app.services.monitoring_scheduler import MonitoringScheduler
from src.app.services.object_storage import IObjectStorage, StorageError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import MonitoringStatus, SessionOrigin
from .dtos import RecordingStatusCommand, StatusReportResponse

logger = logging.getLogger(__name__)

RECORDING_ON_STATUSES = frozenset({"iniciada", "retomada", "enviando"})


class ReportRecordingStatusUseCase:
    """
    Business Rules:
    - iniciada starts (or reuses) a session tagged with the reported origin
    - finalizada with total_segmentos = 0 deletes the session, its segment
      rows and stored objects
    - finalizada with an immediate-seal stop reason seals the session;
      other reasons leave it ativa for the batch sweep
    - Every report with a device id updates the device's is_recording flag
    """

    def __init__(
        self,
        uow: UnitOfWork,
        storage: IObjectStorage,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.storage = storage
        self.clock = clock

    async def execute(
        self, caller: Caller, command: RecordingStatusCommand
    ) -> Result[StatusReportResponse]:
        if command.status == "iniciada" and not command.device_id:
            return Return.err(
                Error("VALIDATION_ERROR", "device_id obrigatório para iniciar gravação")
            )

        async with self.uow:
            scheduler = MonitoringScheduler(self.uow, clock=self.clock)
            session_status = None
            session_id = None
            orphaned_keys = []

            if command.device_id:
                await self.uow.device_statuses.upsert(
                    caller.user_id,
                    command.device_id,
                    is_recording=command.status in RECORDING_ON_STATUSES,
                )

            if command.status == "iniciada":
                session, _ = await scheduler.ensure_active_session(
                    caller.user_id, command.device_id, SessionOrigin(command.origin)
                )
                session_status = MonitoringStatus.ativa.value
                session_id = str(session.id)

            elif command.status == "finalizada":
                outcome = await scheduler.finalize(
                    caller.user_id,
                    command.device_id,
                    command.total_segments,
                    command.stop_reason,
                )
                session_status = outcome.status
                session_id = str(outcome.session_id) if outcome.session_id else None
                orphaned_keys = outcome.orphaned_keys

            await self.uow.commit()

            for key in orphaned_keys:
                try:
                    await self.storage.delete(key)
                except StorageError:
                    logger.warning("Orphaned segment object not removed", extra={"key": key})

            return Return.ok(
                StatusReportResponse(
                    message="Status da gravação atualizado",
                    status_sessao=session_status,
                    sessao_id=session_id,
                    servidor_timestamp=self.clock(),
                )
            )
