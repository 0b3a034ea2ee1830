import json
import logging

import httpx
import pytest

from src.adapter.services.outbound_dispatcher import HttpOutboundDispatcher
from src.app.services.outbound import OutboundKind, OutboundTask

GUARDIAN_URL = "http://hooks.test/guardian"


def make_task(kind=OutboundKind.guardian_alert):
    return OutboundTask(
        kind=kind,
        payload={"protocol": "AMP-20250310-ABC123"},
        context={"user_id": "u-1", "protocol": "AMP-20250310-ABC123"},
    )


def make_dispatcher(handler):
    return HttpOutboundDispatcher(
        endpoints={OutboundKind.guardian_alert: GUARDIAN_URL, OutboundKind.transcription: ""},
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_delivery_posts_task_as_json():
    received = []

    def handler(request: httpx.Request):
        received.append(request)
        return httpx.Response(202)

    dispatcher = make_dispatcher(handler)

    dispatcher.enqueue(make_task())
    await dispatcher.drain()

    assert len(received) == 1
    assert str(received[0].url) == GUARDIAN_URL
    assert json.loads(received[0].content) == {
        "kind": "guardian_alert",
        "protocol": "AMP-20250310-ABC123",
    }


@pytest.mark.asyncio
async def test_network_failure_is_logged_not_raised(caplog):
    def handler(request: httpx.Request):
        raise httpx.ConnectError("connection refused", request=request)

    dispatcher = make_dispatcher(handler)

    with caplog.at_level(logging.WARNING):
        dispatcher.enqueue(make_task())
        await dispatcher.drain()

    failures = [r for r in caplog.records if r.getMessage().startswith("Outbound delivery failed")]
    assert len(failures) == 1
    assert failures[0].task_kind == "guardian_alert"
    assert failures[0].protocol == "AMP-20250310-ABC123"


@pytest.mark.asyncio
async def test_rejected_delivery_is_logged(caplog):
    dispatcher = make_dispatcher(lambda request: httpx.Response(500))

    with caplog.at_level(logging.WARNING):
        dispatcher.enqueue(make_task())
        await dispatcher.drain()

    assert any("rejected with status 500" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_disabled_channel_drops_task():
    received = []
    dispatcher = make_dispatcher(lambda request: received.append(request))

    dispatcher.enqueue(make_task(OutboundKind.transcription))
    dispatcher.enqueue(make_task(OutboundKind.emergency_voice))
    await dispatcher.drain()

    assert received == []


@pytest.mark.asyncio
async def test_drain_waits_for_every_pending_delivery():
    received = []

    async def handler(request: httpx.Request):
        received.append(request)
        return httpx.Response(200)

    dispatcher = make_dispatcher(handler)

    for _ in range(3):
        dispatcher.enqueue(make_task())
    assert received == []

    await dispatcher.drain()

    assert len(received) == 3
