from datetime import datetime
from typing import Callable

from libs.result import Result, Return
from src.app.services.credentials import Caller
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import DeviceConnectivity, LocationSample
from .dtos import PingCommand, PingResponse
from .send_location_use_case import link_alert_id


class PingUseCase:
    """
    Business Rules:
    - Heartbeat upserts the device liveness record as online
    - Optional coordinates are stored as a sample, linked to the ativo alert
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, caller: Caller, command: PingCommand) -> Result[PingResponse]:
        async with self.uow:
            now = self.clock()

            if command.device_id:
                await self.uow.device_statuses.upsert(
                    caller.user_id,
                    command.device_id,
                    status=DeviceConnectivity.online,
                    last_ping_at=now,
                    battery_percent=command.battery_percent,
                    is_charging=command.is_charging,
                    is_recording=command.is_recording,
                    is_monitoring=command.is_monitoring,
                    device_info=command.device_info,
                    app_version=command.app_version,
                    timezone=command.timezone,
                    timezone_offset_minutes=command.timezone_offset_minutes,
                )

            if command.latitude is not None and command.longitude is not None:
                await self.uow.locations.create(
                    LocationSample(
                        user_id=caller.user_id,
                        device_id=command.device_id,
                        alert_id=await link_alert_id(self.uow, caller.user_id),
                        latitude=command.latitude,
                        longitude=command.longitude,
                        accuracy_m=command.accuracy_m,
                        speed=command.speed,
                        heading=command.heading,
                        battery_percent=command.battery_percent,
                        captured_at=now,
                        received_at=now,
                    )
                )

            await self.uow.commit()

            return Return.ok(
                PingResponse(status=DeviceConnectivity.online.value, servidor_timestamp=now)
            )
