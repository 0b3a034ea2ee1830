from datetime import datetime
from typing import Callable

from libs.result import Result, Return
from src.app.services.credentials import Caller
from src.app.services.monitoring_scheduler import MonitoringScheduler
from src.app.services.schedule import find_current_window
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import MonitoringStatus, SessionOrigin
from .dtos import MonitoringStatusCommand, StatusReportResponse

TERMINATING_STATUSES = frozenset({"janela_finalizada", "desativado"})
MONITORING_ON_STATUSES = frozenset({"janela_iniciada", "ativado", "retomado"})


class ReportMonitoringStatusUseCase:
    """
    Business Rules:
    - janela_iniciada starts (or reuses) a scheduled session
    - janela_finalizada and desativado seal the device's ativa session
    - Every report updates the device's is_monitoring flag
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, caller: Caller, command: MonitoringStatusCommand
    ) -> Result[StatusReportResponse]:
        async with self.uow:
            scheduler = MonitoringScheduler(self.uow, clock=self.clock)
            session_status = None
            session_id = None

            device = await self.uow.device_statuses.upsert(
                caller.user_id,
                command.device_id,
                is_monitoring=command.status in MONITORING_ON_STATUSES,
            )

            if command.status == "janela_iniciada":
                window_start = window_end = None
                schedule = await self.uow.schedules.get_by_user(caller.user_id)
                if schedule is not None:
                    window = find_current_window(
                        schedule.periods, self.clock(), device.timezone_offset_minutes or 0
                    )
                    if window is not None:
                        window_start, window_end = window.start_utc, window.end_utc

                session, _ = await scheduler.ensure_active_session(
                    caller.user_id,
                    command.device_id,
                    SessionOrigin.agendado,
                    window_start_utc=window_start,
                    window_end_utc=window_end,
                )
                session_status = MonitoringStatus.ativa.value
                session_id = str(session.id)

            elif command.status in TERMINATING_STATUSES:
                sealed = await scheduler.seal(
                    caller.user_id, command.reason or command.status, device_id=command.device_id
                )
                if sealed:
                    session_status = MonitoringStatus.aguardando_finalizacao.value
                    session_id = str(sealed[0])

            await self.uow.commit()

            return Return.ok(
                StatusReportResponse(
                    message="Status de monitoramento atualizado",
                    status_sessao=session_status,
                    sessao_id=session_id,
                    servidor_timestamp=self.clock(),
                )
            )
