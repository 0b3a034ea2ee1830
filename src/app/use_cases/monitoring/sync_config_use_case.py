"""
Sync Config Use Case

Periodic device check-in: returns the schedule and, inside a scheduled
window, the ativa monitoring session for the device.
"""

from datetime import datetime
from typing import Callable

from libs.result import Error, Result, Return
from src.app.services.credentials import Caller
from src.app.services.monitoring_scheduler import MonitoringScheduler
from src.app.services.schedule import find_current_window, local_now, periods_for_day
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserSummary
from src.domain.base import utc_now
from src.domain.entities import MonitoringStatus, SessionOrigin
from .dtos import GuardianContact, MonitoringState, SyncConfigCommand, SyncConfigResponse


class SyncConfigUseCase:
    """
    Business Rules:
    - Offset is minutes east of UTC; falls back to the device record, then 0
    - Inside a window, the ativa session for (identity, device) is created
      once and returned unchanged on later check-ins
    - Reported timezone data is stored on the device record
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, caller: Caller, command: SyncConfigCommand
    ) -> Result[SyncConfigResponse]:
        async with self.uow:
            identity = await self.uow.identities.get_by_id(caller.user_id)
            if identity is None:
                return Return.err(Error("USER_NOT_FOUND", "Usuário não encontrado"))

            schedule = await self.uow.schedules.get_by_user(identity.id)
            periods = dict(schedule.periods) if schedule else {}

            offset = command.timezone_offset_minutes
            if command.device_id:
                if command.timezone or offset is not None:
                    await self.uow.device_statuses.upsert(
                        identity.id,
                        command.device_id,
                        timezone=command.timezone,
                        timezone_offset_minutes=offset,
                    )
                if offset is None:
                    device = await self.uow.device_statuses.get(identity.id, command.device_id)
                    if device is not None:
                        offset = device.timezone_offset_minutes
            offset = offset or 0

            now = self.clock()
            window = find_current_window(periods, now, offset)

            session = None
            if window is not None and command.device_id:
                scheduler = MonitoringScheduler(self.uow, clock=self.clock)
                session, _ = await scheduler.ensure_active_session(
                    identity.id,
                    command.device_id,
                    SessionOrigin.agendado,
                    window_start_utc=window.start_utc,
                    window_end_utc=window.end_utc,
                )
            elif command.device_id:
                session = await self.uow.monitoring_sessions.get_active(
                    identity.id, command.device_id
                )

            guardians = await self.uow.support_network.get_guardians(identity.id)

            await self.uow.commit()

            session_id = str(session.id) if session else None
            return Return.ok(
                SyncConfigResponse(
                    usuario=UserSummary.from_identity(identity, with_status=True),
                    monitoramento=MonitoringState(
                        ativo=window is not None,
                        sessao_id=session_id,
                        periodos_semana=periods,
                    ),
                    gravacao_ativa=session is not None
                    and session.status == MonitoringStatus.ativa,
                    dentro_horario=window is not None,
                    periodo_atual_index=window.index if window else None,
                    gravacao_inicio=window.inicio if window else None,
                    gravacao_fim=window.fim if window else None,
                    periodos_hoje=periods_for_day(periods, local_now(now, offset).date()),
                    sessao_id=session_id,
                    contatos_rede_apoio=[
                        GuardianContact(
                            id=str(g.id),
                            nome=g.name,
                            telefone_whatsapp=g.whatsapp_phone,
                            relacao=g.relation,
                            is_primary=g.is_primary,
                        )
                        for g in guardians
                    ],
                    servidor_timestamp=now,
                )
            )
