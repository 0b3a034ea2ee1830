from datetime import datetime
from typing import Callable

from libs.result import Error, Result, Return
from src.app.services.credentials import Caller
from src.app.services.schedule import ScheduleError, normalize_schedule
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, MonitoringSchedule
from .dtos import UpdateSchedulesResponse


class UpdateSchedulesUseCase:
    """
    Business Rules:
    - Times are HH:MM, start < end, no overlaps, at most 8h per day
    - Day keys are stored in short form; the schedule is replaced whole
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, caller: Caller, periods: dict) -> Result[UpdateSchedulesResponse]:
        try:
            normalized = normalize_schedule(periods)
        except ScheduleError as e:
            return Return.err(Error("INVALID_SCHEDULE", str(e)))

        async with self.uow:
            schedule = await self.uow.schedules.get_by_user(caller.user_id)
            if schedule is None:
                schedule = MonitoringSchedule(user_id=caller.user_id)

            schedule.periods = normalized
            schedule.updated_at = self.clock()
            await self.uow.schedules.save(schedule)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=caller.user_id,
                    action="update_schedules",
                    event_metadata={"days": sorted(normalized.keys())},
                )
            )

            await self.uow.commit()

            return Return.ok(
                UpdateSchedulesResponse(
                    message="Horários atualizados com sucesso",
                    periodos_atualizados=normalized,
                )
            )
