import pytest
from datetime import timedelta
from uuid import uuid4

from src.app.services.outbound import OutboundKind
from src.app.use_cases.alerts import (
    CancelPanicCommand,
    CancelPanicUseCase,
    TriggerPanicCommand,
    TriggerPanicUseCase,
)
from src.domain.entities import AlertStatus, Guardian, PanicAlert, SessionOrigin


def make_alert(identity, created_at):
    return PanicAlert(
        id=uuid4(),
        user_id=identity.id,
        protocol="AMP-20250310-ABC123",
        status=AlertStatus.ativo,
        guardians_notified=True,
        authorities_dispatched=True,
        created_at=created_at,
    )


@pytest.fixture
def trigger_uow(mock_uow, identity):
    mock_uow.identities.get_by_id.return_value = identity
    mock_uow.panic_alerts.create_if_absent.side_effect = lambda alert: (alert, True)
    mock_uow.support_network.get_guardians.return_value = [
        Guardian(user_id=identity.id, name="Ana", whatsapp_phone="5511911112222", is_primary=True)
    ]
    return mock_uow


@pytest.mark.asyncio
async def test_trigger_creates_alert_and_dispatches_after_commit(
    trigger_uow, caller, dispatcher, fixed_now
):
    use_case = TriggerPanicUseCase(trigger_uow, dispatcher, clock=lambda: fixed_now)

    result = await use_case.execute(
        caller,
        TriggerPanicCommand(device_id="device-1", latitude=-23.55, longitude=-46.63),
    )

    assert result.is_ok()
    data = result.value
    assert data.protocolo.startswith("AMP-20250310-")
    assert data.already_active is False
    assert data.rede_apoio_notificada is True
    assert data.autoridades_acionadas is True
    assert len(data.codigo_compartilhamento) == 8
    assert data.sessao_id is not None

    sample = trigger_uow.locations.create.call_args[0][0]
    assert sample.alert_id is not None
    session = trigger_uow.monitoring_sessions.create_if_absent.call_args[0][0]
    assert session.origin == SessionOrigin.botao_panico
    trigger_uow.commit.assert_called_once()

    assert dispatcher.kinds() == [OutboundKind.guardian_alert, OutboundKind.emergency_voice]
    guardian_task = dispatcher.tasks[0]
    assert guardian_task.payload["recipients"][0]["whatsapp_phone"] == "5511911112222"
    voice_task = dispatcher.tasks[1]
    assert voice_task.payload["type"] == "COPOM_ALERT_CONTEXT"
    assert voice_task.payload["location"]["lat"] == -23.55


@pytest.mark.asyncio
async def test_trigger_when_already_active_dispatches_nothing(
    trigger_uow, identity, caller, dispatcher, fixed_now
):
    existing = make_alert(identity, fixed_now - timedelta(seconds=10))
    trigger_uow.panic_alerts.create_if_absent.side_effect = None
    trigger_uow.panic_alerts.create_if_absent.return_value = (existing, False)
    use_case = TriggerPanicUseCase(trigger_uow, dispatcher, clock=lambda: fixed_now)

    result = await use_case.execute(caller, TriggerPanicCommand())

    assert result.is_ok()
    assert result.value.already_active is True
    assert result.value.alerta_id == str(existing.id)
    assert dispatcher.tasks == []
    trigger_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_trigger_requires_coordinates_in_pairs(trigger_uow, caller, dispatcher):
    use_case = TriggerPanicUseCase(trigger_uow, dispatcher)

    result = await use_case.execute(caller, TriggerPanicCommand(latitude=-23.55))

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    trigger_uow.panic_alerts.create_if_absent.assert_not_called()


@pytest.mark.parametrize(
    "elapsed,escalated",
    [(45, False), (60, False), (60.5, True), (61, True)],
)
@pytest.mark.asyncio
async def test_cancel_escalation_window(
    mock_uow, identity, caller, dispatcher, fixed_now, elapsed, escalated
):
    alert = make_alert(identity, fixed_now - timedelta(seconds=elapsed))
    mock_uow.panic_alerts.get_active_by_user.return_value = alert
    mock_uow.panic_alerts.cancel_if_active.return_value = alert
    use_case = CancelPanicUseCase(
        mock_uow, dispatcher, clock=lambda: fixed_now, escalation_window_seconds=60
    )

    result = await use_case.execute(caller, CancelPanicCommand(reason="engano"))

    assert result.is_ok()
    data = result.value
    assert data.tempo_ate_cancelamento_segundos == int(elapsed)
    assert data.escalated is escalated
    assert data.autoridades_acionadas is escalated
    assert data.cancelado_dentro_janela is (not escalated)
    assert data.guardioes_notificados is True

    kwargs = mock_uow.panic_alerts.cancel_if_active.call_args.kwargs
    assert kwargs["elapsed_seconds"] == elapsed
    assert kwargs["escalated"] is escalated


@pytest.mark.asyncio
async def test_cancel_seals_sessions_and_closes_shares(
    mock_uow, identity, caller, dispatcher, fixed_now
):
    alert = make_alert(identity, fixed_now - timedelta(seconds=30))
    session_id = uuid4()
    mock_uow.panic_alerts.get_active_by_user.return_value = alert
    mock_uow.panic_alerts.cancel_if_active.return_value = alert
    mock_uow.monitoring_sessions.seal_active.return_value = [session_id]
    use_case = CancelPanicUseCase(mock_uow, dispatcher, clock=lambda: fixed_now)

    result = await use_case.execute(caller, CancelPanicCommand())

    assert result.is_ok()
    assert result.value.window_selada is True
    assert result.value.window_id == str(session_id)
    reason = mock_uow.monitoring_sessions.seal_active.call_args[0][1]
    assert reason == "panico_cancelado"
    mock_uow.location_shares.deactivate_all.assert_called_once_with(identity.id, fixed_now)
    assert dispatcher.kinds() == [OutboundKind.guardian_resolved]


@pytest.mark.asyncio
async def test_cancel_without_active_alert(mock_uow, caller, dispatcher):
    use_case = CancelPanicUseCase(mock_uow, dispatcher)

    result = await use_case.execute(caller, CancelPanicCommand())

    assert result.is_err()
    assert result.error.code == "NOT_FOUND"
    assert dispatcher.tasks == []


@pytest.mark.asyncio
async def test_cancel_race_lost_to_concurrent_cancel(
    mock_uow, identity, caller, dispatcher, fixed_now
):
    mock_uow.panic_alerts.get_active_by_user.return_value = make_alert(identity, fixed_now)
    mock_uow.panic_alerts.cancel_if_active.return_value = None
    use_case = CancelPanicUseCase(mock_uow, dispatcher, clock=lambda: fixed_now)

    result = await use_case.execute(caller, CancelPanicCommand())

    assert result.is_err()
    assert result.error.code == "NOT_FOUND"
    mock_uow.commit.assert_not_called()
