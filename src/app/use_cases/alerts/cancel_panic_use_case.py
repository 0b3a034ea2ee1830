"""
Cancel Panic Use Case

One-shot cancellation of the caller's ativo alert.
"""

import logging
import math
from datetime import datetime
from typing import Callable, Optional

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.credentials import Caller
from src.app.services.monitoring_scheduler import (
    PANIC_CANCELLED_REASON,
    MonitoringScheduler,
)
from src.app.services.outbound import IOutboundDispatcher, OutboundKind, OutboundTask
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent
from .dtos import CancelPanicCommand, CancelPanicResponse

logger = logging.getLogger(__name__)


class CancelPanicUseCase:
    """
    Use case for panic cancellation.

    Business Rules:
    - Requires an ativo alert; a second cancel fails NOT_FOUND
    - escalated = unrounded elapsed > escalation window (exactly the window is not escalated)
    - Seals the identity's ativa monitoring sessions (panico_cancelado)
    - Deactivates active location-sharing links
    - Already dispatched trigger notifications are not recalled; a
      resolved notification is enqueued after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: IOutboundDispatcher,
        clock: Callable[[], datetime] = utc_now,
        escalation_window_seconds: Optional[int] = None,
    ):
        self.uow = uow
        self.dispatcher = dispatcher
        self.clock = clock
        if escalation_window_seconds is None:
            escalation_window_seconds = ApplicationConfig.ESCALATION_WINDOW_SECONDS
        self.escalation_window_seconds = escalation_window_seconds

    async def execute(
        self, caller: Caller, command: CancelPanicCommand
    ) -> Result[CancelPanicResponse]:
        not_found = Error("NOT_FOUND", "Nenhum alerta de pânico ativo")

        async with self.uow:
            alert = await self.uow.panic_alerts.get_active_by_user(caller.user_id)
            if alert is None:
                return Return.err(not_found)

            now = self.clock()
            exact = (now - alert.created_at).total_seconds()
            elapsed = max(0, math.floor(exact))
            escalated = exact > self.escalation_window_seconds
            cancel_type = command.cancel_type or "manual"

            cancelled = await self.uow.panic_alerts.cancel_if_active(
                alert.id,
                cancel_type=cancel_type,
                cancel_reason=command.reason,
                cancelled_at=now,
                elapsed_seconds=elapsed,
                escalated=escalated,
            )
            if cancelled is None:
                # Lost a race with a concurrent cancel
                return Return.err(not_found)

            scheduler = MonitoringScheduler(self.uow, clock=self.clock)
            sealed = await scheduler.seal(caller.user_id, PANIC_CANCELLED_REASON)

            cancelled.window_sealed = bool(sealed)
            cancelled.sealed_window_id = sealed[0] if sealed else None
            await self.uow.panic_alerts.update(cancelled)

            await self.uow.location_shares.deactivate_all(caller.user_id, now)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=caller.user_id,
                    action="panico_cancelado",
                    ip_address=command.ip_address,
                    event_metadata={
                        "protocol": cancelled.protocol,
                        "elapsed_seconds": elapsed,
                        "escalated": escalated,
                        **caller.audit_metadata(),
                    },
                )
            )

            await self.uow.commit()

            self.dispatcher.enqueue(
                OutboundTask(
                    kind=OutboundKind.guardian_resolved,
                    payload={
                        "alert_id": str(cancelled.id),
                        "protocol": cancelled.protocol,
                        "cancel_type": cancel_type,
                        "escalated": escalated,
                    },
                    context={"user_id": str(caller.user_id), "protocol": cancelled.protocol},
                )
            )

            return Return.ok(
                CancelPanicResponse(
                    alerta_id=str(cancelled.id),
                    protocolo=cancelled.protocol,
                    tipo_cancelamento=cancel_type,
                    cancelado_dentro_janela=not escalated,
                    tempo_ate_cancelamento_segundos=elapsed,
                    escalated=escalated,
                    autoridades_acionadas=escalated,
                    guardioes_notificados=cancelled.guardians_notified,
                    window_selada=cancelled.window_sealed,
                    window_id=str(cancelled.sealed_window_id) if cancelled.sealed_window_id else None,
                )
            )
