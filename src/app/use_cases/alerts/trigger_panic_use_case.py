"""
Trigger Panic Use Case

Opens an ativo panic alert and fans out guardian and emergency-voice
notifications after the alert is committed.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.credentials import Caller
from src.app.services.emergency_context import build_emergency_context
from src.app.services.monitoring_scheduler import MonitoringScheduler
from src.app.services.movement import classify_samples
from src.app.services.outbound import IOutboundDispatcher, OutboundKind, OutboundTask
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import (
    AuditEvent,
    LocationSample,
    LocationShare,
    PanicAlert,
    SessionOrigin,
)
from .dtos import TriggerPanicCommand, TriggerPanicResponse
from .protocol import generate_protocol, generate_share_code

logger = logging.getLogger(__name__)


class TriggerPanicUseCase:
    """
    Use case for panic triggering.

    Business Rules:
    - At most one ativo alert per identity; a second trigger returns the
      existing alert and dispatches nothing
    - Coordinates, when present, are stored as a sample linked to the alert
    - A location-sharing link is created (or reused) for the tracking URL
    - With a device id, a panic-origin monitoring session is started
    - Guardian and emergency-voice tasks are enqueued after commit,
      never awaited, never retried
    """

    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: IOutboundDispatcher,
        clock: Callable[[], datetime] = utc_now,
        tracking_base_url: Optional[str] = None,
    ):
        self.uow = uow
        self.dispatcher = dispatcher
        self.clock = clock
        self.tracking_base_url = tracking_base_url or ApplicationConfig.TRACKING_BASE_URL

    async def execute(
        self, caller: Caller, command: TriggerPanicCommand
    ) -> Result[TriggerPanicResponse]:
        if (command.latitude is None) != (command.longitude is None):
            return Return.err(
                Error("VALIDATION_ERROR", "latitude e longitude devem ser enviadas juntas")
            )

        async with self.uow:
            identity = await self.uow.identities.get_by_id(caller.user_id)
            if identity is None:
                return Return.err(Error("USER_NOT_FOUND", "Usuário não encontrado"))

            now = self.clock()
            alert, created = await self.uow.panic_alerts.create_if_absent(
                PanicAlert(
                    user_id=identity.id,
                    device_id=command.device_id,
                    protocol=generate_protocol(now),
                    trigger_type=command.trigger_type or "botao_panico",
                    latitude=command.latitude,
                    longitude=command.longitude,
                    created_at=now,
                )
            )

            if not created:
                logger.info("Panic already active", extra={"protocol": alert.protocol})
                return Return.ok(
                    TriggerPanicResponse(
                        alerta_id=str(alert.id),
                        protocolo=alert.protocol,
                        rede_apoio_notificada=alert.guardians_notified,
                        autoridades_acionadas=alert.authorities_dispatched,
                        already_active=True,
                    )
                )

            if command.latitude is not None:
                await self.uow.locations.create(
                    LocationSample(
                        user_id=identity.id,
                        device_id=command.device_id,
                        alert_id=alert.id,
                        latitude=command.latitude,
                        longitude=command.longitude,
                        accuracy_m=command.accuracy_m,
                        captured_at=now,
                        received_at=now,
                    )
                )

            share = await self.uow.location_shares.get_active_by_user(identity.id)
            if share is None:
                share = await self.uow.location_shares.create(
                    LocationShare(user_id=identity.id, alert_id=alert.id, code=generate_share_code())
                )

            session_id = None
            if command.device_id:
                scheduler = MonitoringScheduler(self.uow, clock=self.clock)
                session, _ = await scheduler.ensure_active_session(
                    identity.id, command.device_id, SessionOrigin.botao_panico
                )
                session_id = str(session.id)

            guardians = await self.uow.support_network.get_guardians(identity.id)
            aggressor = await self.uow.support_network.get_aggressor(identity.id)
            samples = await self.uow.locations.get_recent_by_user(identity.id, limit=3)
            context = build_emergency_context(
                alert,
                identity,
                last_sample=samples[-1] if samples else None,
                movement=classify_samples(samples),
                aggressor=aggressor,
                share_code=share.code,
                tracking_base_url=self.tracking_base_url,
                now=now,
            )

            alert.guardians_notified = True
            alert.authorities_dispatched = True
            await self.uow.panic_alerts.update(alert)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=identity.id,
                    action="panico_acionado",
                    ip_address=command.ip_address,
                    event_metadata={
                        "protocol": alert.protocol,
                        "trigger_type": alert.trigger_type,
                        **caller.audit_metadata(),
                    },
                )
            )

            await self.uow.commit()

            task_context = {"user_id": str(identity.id), "protocol": alert.protocol}
            self.dispatcher.enqueue(
                OutboundTask(
                    kind=OutboundKind.guardian_alert,
                    payload=self._guardian_payload(alert, identity.full_name, guardians, context),
                    context=task_context,
                )
            )
            self.dispatcher.enqueue(
                OutboundTask(kind=OutboundKind.emergency_voice, payload=context, context=task_context)
            )

            return Return.ok(
                TriggerPanicResponse(
                    alerta_id=str(alert.id),
                    protocolo=alert.protocol,
                    rede_apoio_notificada=alert.guardians_notified,
                    autoridades_acionadas=alert.authorities_dispatched,
                    codigo_compartilhamento=share.code,
                    sessao_id=session_id,
                )
            )

    def _guardian_payload(
        self, alert: PanicAlert, victim_name: Optional[str], guardians: List, context: dict
    ) -> dict:
        return {
            "alert_id": str(alert.id),
            "protocol": alert.protocol,
            "victim_name": victim_name,
            "monitoring_link": context["monitoring_link"],
            "location": {"lat": context["location"]["lat"], "lng": context["location"]["lng"]},
            "recipients": [
                {"name": g.name, "whatsapp_phone": g.whatsapp_phone, "is_primary": g.is_primary}
                for g in guardians
            ],
        }
