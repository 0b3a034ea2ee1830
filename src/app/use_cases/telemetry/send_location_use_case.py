import logging
from datetime import datetime
from typing import Callable, Optional

from libs.result import Result, Return
from src.app.services.credentials import Caller
from src.app.services.movement import classify_samples
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_naive_utc, utc_now
from src.domain.entities import LocationSample
from .dtos import SendLocationCommand, SendLocationResponse

logger = logging.getLogger(__name__)


async def link_alert_id(uow: UnitOfWork, user_id, requested: Optional[str] = None):
    """
    Caller's ativo alert id. An explicit id never links a sample to another
    alert: when it is not the caller's ativo alert, the ativo one is used.
    """
    active = await uow.panic_alerts.get_active_by_user(user_id)
    if active is None:
        return None
    if requested and requested != str(active.id):
        logger.debug("Ignoring alerta_id that is not the caller's ativo alert")
    return active.id


class SendLocationUseCase:
    """
    Business Rules:
    - Coordinates are range-checked before anything is stored
    - Samples link to the caller's ativo alert when one exists
    - The response carries the movement class over recent samples
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, caller: Caller, command: SendLocationCommand
    ) -> Result[SendLocationResponse]:
        async with self.uow:
            now = self.clock()
            alert_id = await link_alert_id(self.uow, caller.user_id, command.alert_id)

            await self.uow.locations.create(
                LocationSample(
                    user_id=caller.user_id,
                    device_id=command.device_id,
                    alert_id=alert_id,
                    latitude=command.latitude,
                    longitude=command.longitude,
                    accuracy_m=command.accuracy_m,
                    speed=command.speed,
                    heading=command.heading,
                    battery_percent=command.battery_percent,
                    captured_at=to_naive_utc(command.captured_at) if command.captured_at else now,
                    received_at=now,
                )
            )

            samples = await self.uow.locations.get_recent_by_user(caller.user_id, limit=3)
            movement = classify_samples(samples)

            await self.uow.commit()

            return Return.ok(
                SendLocationResponse(
                    message="Localização registrada",
                    alerta_id=str(alert_id) if alert_id else None,
                    movimento=movement.value if movement else None,
                    servidor_timestamp=now,
                )
            )
