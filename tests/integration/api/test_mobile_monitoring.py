import pytest
from httpx import AsyncClient
from sqlmodel import select

from config import ApplicationConfig
from src.app.services.outbound import OutboundKind
from src.app.services.schedule import day_key_for
from src.domain.base import utc_now
from src.domain.entities import AudioSegment, MonitoringSession


def window_around_now() -> dict:
    """A period of today (UTC) that contains the current minute."""
    now = utc_now()
    minute = now.hour * 60 + now.minute
    start = max(0, minute - 60)
    end = min(24 * 60 - 1, minute + 60)
    return {
        day_key_for(now.date()): [
            {
                "inicio": f"{start // 60:02d}:{start % 60:02d}",
                "fim": f"{end // 60:02d}:{end % 60:02d}",
            }
        ]
    }


async def start_recording(client, session_token, device_id="device-1"):
    response = await client.post(
        "/mobile-api",
        json={
            "action": "reportarStatusGravacao",
            "session_token": session_token,
            "device_id": device_id,
            "status_gravacao": "iniciada",
            "origem_gravacao": "botao_manual",
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


async def upload_segment(client, session_token, index=0, content=b"\x00audio-bytes"):
    return await client.post(
        "/mobile-api",
        data={
            "action": "receberAudioMobile",
            "session_token": session_token,
            "device_id": "device-1",
            "segmento_idx": str(index),
            "duracao_segundos": "30",
        },
        files={"audio": (f"seg{index}.m4a", content, "audio/mp4")},
    )


@pytest.mark.asyncio
async def test_update_schedules_and_sync_inside_window(client: AsyncClient, session_token):
    periods = window_around_now()
    response = await client.post(
        "/mobile-api",
        json={
            "action": "update_schedules",
            "session_token": session_token,
            "periodos_semana": periods,
        },
    )
    assert response.status_code == 200
    assert response.json()["periodos_atualizados"] == periods

    sync = {
        "action": "syncConfigMobile",
        "session_token": session_token,
        "device_id": "device-1",
        "timezone_offset_minutes": 0,
    }
    first = await client.post("/mobile-api", json=sync)
    second = await client.post("/mobile-api", json=sync)

    assert first.status_code == 200
    data = first.json()
    assert data["dentro_horario"] is True
    assert data["gravacao_ativa"] is True
    assert data["periodo_atual_index"] == 0
    assert len(data["contatos_rede_apoio"]) == 2
    assert data["contatos_rede_apoio"][0]["is_primary"] is True
    assert second.json()["sessao_id"] == data["sessao_id"]


@pytest.mark.asyncio
async def test_update_schedules_rejects_more_than_eight_hours(client: AsyncClient, session_token):
    response = await client.post(
        "/mobile-api",
        json={
            "action": "update_schedules",
            "session_token": session_token,
            "periodos_semana": {"seg": [{"inicio": "08:00", "fim": "17:00"}]},
        },
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_SCHEDULE"


@pytest.mark.asyncio
async def test_sync_with_legacy_identifier_outside_window(client: AsyncClient, identity):
    response = await client.post(
        "/mobile-api",
        json={"action": "syncConfigMobile", "email_usuario": identity.email, "device_id": "d"},
    )

    assert response.status_code == 200
    assert response.json()["dentro_horario"] is False
    assert response.json()["sessao_id"] is None


@pytest.mark.asyncio
async def test_audio_upload_is_idempotent_per_index(
    client: AsyncClient, session_token, storage, dispatcher
):
    await start_recording(client, session_token)

    first = await upload_segment(client, session_token, index=0)
    again = await upload_segment(client, session_token, index=0)

    assert first.status_code == 200, first.text
    assert again.status_code == 200
    assert first.json()["duplicado"] is False
    assert again.json()["duplicado"] is True
    assert again.json()["segmento_id"] == first.json()["segmento_id"]
    assert list(storage.objects) == [first.json()["storage_path"]]
    assert dispatcher.kinds() == [OutboundKind.transcription]


@pytest.mark.asyncio
async def test_audio_upload_without_session_is_rejected(
    client: AsyncClient, session_token, storage
):
    response = await upload_segment(client, session_token)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "SESSION_REQUIRED"
    assert storage.objects == {}


@pytest.mark.asyncio
async def test_signed_url_download(client: AsyncClient, session_token):
    await start_recording(client, session_token)
    uploaded = (await upload_segment(client, session_token, content=b"RIFF-data")).json()

    response = await client.post(
        "/mobile-api",
        json={
            "action": "getAudioSignedUrl",
            "session_token": session_token,
            "gravacao_id": uploaded["segmento_id"],
        },
    )
    assert response.status_code == 200
    signed_url = response.json()["signed_url"]
    path = signed_url.replace(ApplicationConfig.PUBLIC_BASE_URL.rstrip("/"), "")

    download = await client.get(path)
    assert download.status_code == 200
    assert download.content == b"RIFF-data"

    tampered = await client.get(path.replace("token=", "token=x"))
    assert tampered.status_code == 401
    assert tampered.json()["error"]["code"] == "LINK_INVALID"


@pytest.mark.asyncio
async def test_media_read_failure_is_reported(client: AsyncClient, session_token, storage):
    await start_recording(client, session_token)
    uploaded = (await upload_segment(client, session_token)).json()
    response = await client.post(
        "/mobile-api",
        json={
            "action": "getAudioSignedUrl",
            "session_token": session_token,
            "gravacao_id": uploaded["segmento_id"],
        },
    )
    path = response.json()["signed_url"].replace(ApplicationConfig.PUBLIC_BASE_URL.rstrip("/"), "")
    storage.fail_on_get = True

    download = await client.get(path)

    assert download.status_code == 500
    assert download.json() == {
        "success": False,
        "error": {"code": "STORAGE_FAILED", "message": "Erro interno do servidor"},
    }


@pytest.mark.asyncio
async def test_signed_url_for_foreign_key_is_forbidden(client: AsyncClient, session_token):
    response = await client.post(
        "/mobile-api",
        json={
            "action": "getAudioSignedUrl",
            "session_token": session_token,
            "file_path": "another-user/2025-01-01/seg.m4a",
        },
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_recording_finalized_with_zero_segments_is_deleted(
    client: AsyncClient, session_token, identity, db_session
):
    await start_recording(client, session_token)

    response = await client.post(
        "/mobile-api",
        json={
            "action": "reportarStatusGravacao",
            "session_token": session_token,
            "device_id": "device-1",
            "status_gravacao": "finalizada",
            "motivo_parada": "botao_manual",
            "total_segmentos": 0,
        },
    )

    assert response.status_code == 200
    assert response.json()["status_sessao"] == "deleted"
    sessions = (
        await db_session.exec(
            select(MonitoringSession).where(MonitoringSession.user_id == identity.id)
        )
    ).all()
    assert sessions == []


@pytest.mark.asyncio
async def test_recording_finalized_manually_is_sealed(
    client: AsyncClient, session_token, identity, db_session
):
    await start_recording(client, session_token)
    await upload_segment(client, session_token, index=0)

    response = await client.post(
        "/mobile-api",
        json={
            "action": "reportarStatusGravacao",
            "session_token": session_token,
            "device_id": "device-1",
            "status_gravacao": "finalizada",
            "motivo_parada": "botao_manual",
            "total_segmentos": 1,
        },
    )

    assert response.status_code == 200
    assert response.json()["status_sessao"] == "aguardando_finalizacao"
    segments = (
        await db_session.exec(select(AudioSegment).where(AudioSegment.user_id == identity.id))
    ).all()
    assert len(segments) == 1


@pytest.mark.asyncio
async def test_ping_updates_device(client: AsyncClient, session_token):
    response = await client.post(
        "/mobile-api",
        json={
            "action": "pingMobile",
            "session_token": session_token,
            "device_id": "device-1",
            "bateria_percentual": 80,
            "is_recording": False,
            "timezone_offset_minutes": -180,
        },
    )

    assert response.status_code == 200
    assert response.json()["status"] == "online"
    assert response.json()["servidor_timestamp"]
