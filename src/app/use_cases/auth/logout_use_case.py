from datetime import datetime
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services.credentials import Caller
from src.app.services.token_vault import TokenVault
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, DeviceConnectivity
from .dtos import MessageResponse


class LogoutUseCase:
    """
    Business Rules:
    - Blocked while the identity has an ativo panic alert
    - Revokes the presented session and marks the device offline
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, caller: Caller, device_id: str, ip_address: Optional[str] = None
    ) -> Result[MessageResponse]:
        async with self.uow:
            active_alert = await self.uow.panic_alerts.get_active_by_user(caller.user_id)
            if active_alert is not None:
                return Return.err(
                    Error("PANIC_ACTIVE", "Logout bloqueado: há um alerta de pânico ativo")
                )

            vault = TokenVault(self.uow, clock=self.clock)
            await vault.revoke(caller.session_token)

            await self.uow.device_statuses.upsert(
                caller.user_id, device_id, status=DeviceConnectivity.offline
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=caller.user_id,
                    action="logout_mobile",
                    ip_address=ip_address,
                    event_metadata={"device_id": device_id},
                )
            )

            await self.uow.commit()

            return Return.ok(MessageResponse(message="Logout realizado com sucesso"))
