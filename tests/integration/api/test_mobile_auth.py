import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AuditEvent
from tests.fixtures.identities import DURESS_PASSWORD, NORMAL_PASSWORD


async def audited_actions(db_session, user_id):
    db_session.expire_all()
    events = (await db_session.exec(select(AuditEvent).where(AuditEvent.user_id == user_id))).all()
    return [event.action for event in events]


@pytest.mark.asyncio
async def test_successful_login(client: AsyncClient, identity):
    """
    Given an ativo identity
    When it logs in with its normal password
    Then it receives a 128-char session token and refresh token
    And loginTipo is normal
    """
    response = await client.post(
        "/mobile-api",
        json={"action": "loginCustomizado", "email": identity.email, "senha": NORMAL_PASSWORD},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["loginTipo"] == "normal"
    assert len(data["session"]["token"]) == 128
    assert len(data["refresh_token"]) == 128
    assert data["session"]["token"] != data["refresh_token"]
    assert data["usuario"]["email"] == identity.email


@pytest.mark.asyncio
async def test_coercion_login_is_indistinguishable_except_tag(
    client: AsyncClient, identity, login, db_session
):
    normal = await login(NORMAL_PASSWORD)
    duress = await login(DURESS_PASSWORD)

    assert duress["loginTipo"] == "coacao"
    assert set(duress.keys()) == set(normal.keys())
    assert duress["usuario"] == normal["usuario"]
    assert "coacao_login" in await audited_actions(db_session, identity.id)


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, identity):
    response = await client.post(
        "/mobile-api",
        json={"action": "loginCustomizado", "email": identity.email, "senha": "errada"},
    )

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_inactive_account(client: AsyncClient, inactive_identity):
    response = await client.post(
        "/mobile-api",
        json={
            "action": "loginCustomizado",
            "email": inactive_identity.email,
            "senha": NORMAL_PASSWORD,
        },
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ACCOUNT_INACTIVE"


@pytest.mark.asyncio
async def test_login_rate_limited_on_sixth_attempt(client: AsyncClient, identity):
    payload = {"action": "loginCustomizado", "email": identity.email, "senha": "errada"}

    for _ in range(5):
        response = await client.post("/mobile-api", json=payload)
        assert response.status_code == 401

    response = await client.post("/mobile-api", json=payload)
    assert response.status_code == 429
    assert response.json()["error"]["code"] == "RATE_LIMITED"


@pytest.mark.asyncio
async def test_refresh_rotation_and_reuse(client: AsyncClient, identity, login, db_session):
    """
    Given a fresh refresh token
    When it is rotated
    Then a new pair is issued
    And presenting the old token again fails and is audited
    """
    old_refresh = (await login())["refresh_token"]

    response = await client.post(
        "/mobile-api", json={"action": "refresh_token", "refresh_token": old_refresh}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["refresh_token"] != old_refresh
    assert len(data["access_token"]) == 128
    assert data["user"]["id"] == str(identity.id)

    reuse = await client.post(
        "/mobile-api", json={"action": "refresh_token", "refresh_token": old_refresh}
    )
    assert reuse.status_code == 401
    assert reuse.json()["error"]["code"] == "REFRESH_INVALID"
    assert "refresh_token_reuse" in await audited_actions(db_session, identity.id)

    # The successor is still usable
    successor = await client.post(
        "/mobile-api", json={"action": "refresh_token", "refresh_token": data["refresh_token"]}
    )
    assert successor.status_code == 200


@pytest.mark.asyncio
async def test_rotated_session_token_authenticates(client: AsyncClient, login):
    refresh = (await login())["refresh_token"]
    refreshed = await client.post(
        "/mobile-api", json={"action": "refresh_token", "refresh_token": refresh}
    )
    token = refreshed.json()["access_token"]

    response = await client.post(
        "/mobile-api",
        json={"action": "validate_password", "session_token": token, "senha": NORMAL_PASSWORD},
    )

    assert response.status_code == 200
    assert response.json()["loginTipo"] == "normal"


@pytest.mark.asyncio
async def test_validate_password_reports_coercion(client: AsyncClient, session_token):
    response = await client.post(
        "/mobile-api",
        json={
            "action": "validate_password",
            "session_token": session_token,
            "senha": DURESS_PASSWORD,
        },
    )

    assert response.status_code == 200
    assert response.json()["loginTipo"] == "coacao"


@pytest.mark.asyncio
async def test_change_password_under_coercion_keeps_old_password(
    client: AsyncClient, session_token, login
):
    response = await client.post(
        "/mobile-api",
        json={
            "action": "change_password",
            "session_token": session_token,
            "senha_atual": DURESS_PASSWORD,
            "nova_senha": "Outra#Senha9",
        },
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Senha alterada com sucesso"
    # The normal password still works
    assert (await login(NORMAL_PASSWORD))["loginTipo"] == "normal"


@pytest.mark.asyncio
async def test_logout_revokes_session(client: AsyncClient, session_token):
    response = await client.post(
        "/mobile-api",
        json={"action": "logoutMobile", "session_token": session_token, "device_id": "device-1"},
    )
    assert response.status_code == 200

    after = await client.post(
        "/mobile-api", json={"action": "pingMobile", "session_token": session_token}
    )
    assert after.status_code == 401
    assert after.json()["error"]["code"] == "SESSION_INVALID"


@pytest.mark.asyncio
async def test_session_only_action_rejects_legacy_identifier(client: AsyncClient, identity):
    response = await client.post(
        "/mobile-api", json={"action": "pingMobile", "email_usuario": identity.email}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "CREDENTIAL_REQUIRED"


@pytest.mark.asyncio
async def test_unknown_action(client: AsyncClient):
    response = await client.post("/mobile-api", json={"action": "hackTheGibson"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ACTION"


@pytest.mark.asyncio
async def test_missing_action(client: AsyncClient):
    response = await client.post("/mobile-api", json={"email": "x@y.z"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ACTION"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
