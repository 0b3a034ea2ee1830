import pytest

from src.app.use_cases.auth import LoginCommand, LoginUseCase
from src.domain.entities import IdentityStatus
from tests.fixtures.identities import DURESS_PASSWORD, NORMAL_PASSWORD


def login_command(password, **overrides):
    values = dict(email="Maria@Ampara.app", password=password, ip_address="10.0.0.1")
    values.update(overrides)
    return LoginCommand(**values)


def audited_actions(mock_uow):
    return [call.args[0].action for call in mock_uow.audit_events.create.call_args_list]


@pytest.mark.asyncio
async def test_successful_login(mock_uow, identity, fixed_now):
    mock_uow.identities.get_by_email.return_value = identity
    use_case = LoginUseCase(mock_uow, clock=lambda: fixed_now)

    result = await use_case.execute(login_command(NORMAL_PASSWORD))

    assert result.is_ok()
    data = result.value
    assert data.loginTipo == "normal"
    assert len(data.session.token) == 128
    assert len(data.refresh_token) == 128
    assert data.usuario.email == identity.email

    mock_uow.identities.get_by_email.assert_called_once_with("maria@ampara.app")
    mock_uow.rate_limits.count_since.assert_called_once()
    assert mock_uow.rate_limits.count_since.call_args[0][0] == "maria@ampara.app:10.0.0.1"
    mock_uow.access_sessions.create.assert_called_once()
    mock_uow.refresh_tokens.create.assert_called_once()
    assert identity.last_access_at == fixed_now
    assert audited_actions(mock_uow) == ["login_mobile_success"]


@pytest.mark.asyncio
async def test_coercion_login_looks_normal_but_is_tagged(mock_uow, identity):
    mock_uow.identities.get_by_email.return_value = identity
    use_case = LoginUseCase(mock_uow)

    result = await use_case.execute(login_command(DURESS_PASSWORD))

    assert result.is_ok()
    assert result.value.loginTipo == "coacao"
    assert result.value.success is True
    assert audited_actions(mock_uow) == ["coacao_login", "login_mobile_success"]
    silent = mock_uow.audit_events.create.call_args_list[0].args[0]
    assert silent.event_metadata == {"silent": True}


@pytest.mark.asyncio
async def test_login_invalid_credentials_wrong_password(mock_uow, identity):
    mock_uow.identities.get_by_email.return_value = identity
    use_case = LoginUseCase(mock_uow)

    result = await use_case.execute(login_command("WrongPassword!"))

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.access_sessions.create.assert_not_called()
    assert audited_actions(mock_uow) == ["login_mobile_failed"]


@pytest.mark.asyncio
async def test_login_invalid_credentials_nonexistent_user(mock_uow, monkeypatch):
    monkeypatch.setattr("src.app.services.authenticator.ApplicationConfig.BCRYPT_ROUNDS", 4)
    mock_uow.identities.get_by_email.return_value = None
    use_case = LoginUseCase(mock_uow)

    result = await use_case.execute(login_command(NORMAL_PASSWORD))

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.access_sessions.create.assert_not_called()
    mock_uow.audit_events.create.assert_not_called()


@pytest.mark.asyncio
async def test_login_inactive_account(mock_uow, identity):
    identity.status = IdentityStatus.bloqueado
    mock_uow.identities.get_by_email.return_value = identity
    use_case = LoginUseCase(mock_uow)

    result = await use_case.execute(login_command(NORMAL_PASSWORD))

    assert result.is_err()
    assert result.error.code == "ACCOUNT_INACTIVE"
    mock_uow.access_sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_login_rate_limited_before_password_check(mock_uow, identity):
    mock_uow.rate_limits.count_since.return_value = 5
    use_case = LoginUseCase(mock_uow)

    result = await use_case.execute(login_command(NORMAL_PASSWORD))

    assert result.is_err()
    assert result.error.code == "RATE_LIMITED"
    mock_uow.identities.get_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_uninstall_login_is_audited(mock_uow, identity):
    mock_uow.identities.get_by_email.return_value = identity
    use_case = LoginUseCase(mock_uow)

    result = await use_case.execute(login_command(NORMAL_PASSWORD, action_type="desinstalacao"))

    assert result.is_ok()
    assert "app_desinstalacao" in audited_actions(mock_uow)
