import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from src.adapter.services.jwt_url_signer import JwtUrlSigner
from src.app.services.credentials import AuthStrength, Caller
from tests.fixtures.fakes import InMemoryObjectStorage, RecordingDispatcher
from tests.fixtures.identities import make_identity


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.identities.get_by_id = AsyncMock()
    uow.identities.get_by_email = AsyncMock()
    uow.identities.update = AsyncMock()
    uow.access_sessions.create = AsyncMock(side_effect=lambda s: s)
    uow.access_sessions.get_by_token_hash = AsyncMock()
    uow.access_sessions.revoke_by_token_hash = AsyncMock(return_value=True)
    uow.access_sessions.revoke_all_by_user_id = AsyncMock(return_value=0)
    uow.refresh_tokens.create = AsyncMock(side_effect=lambda t: t)
    uow.refresh_tokens.get_by_token_hash = AsyncMock()
    uow.refresh_tokens.claim_for_rotation = AsyncMock(return_value=True)
    uow.refresh_tokens.set_replaced_by = AsyncMock()
    uow.refresh_tokens.revoke_descendants = AsyncMock(return_value=0)
    uow.rate_limits.count_since = AsyncMock(return_value=0)
    uow.rate_limits.create = AsyncMock()
    uow.audit_events.create = AsyncMock()
    uow.panic_alerts.create_if_absent = AsyncMock()
    uow.panic_alerts.get_active_by_user = AsyncMock(return_value=None)
    uow.panic_alerts.cancel_if_active = AsyncMock()
    uow.panic_alerts.update = AsyncMock()
    uow.monitoring_sessions.get_active = AsyncMock(return_value=None)
    uow.monitoring_sessions.create_if_absent = AsyncMock(side_effect=lambda s: (s, True))
    uow.monitoring_sessions.seal_active = AsyncMock(return_value=[])
    uow.monitoring_sessions.delete = AsyncMock()
    uow.audio_segments.get_by_session_and_index = AsyncMock(return_value=None)
    uow.audio_segments.create_if_absent = AsyncMock(side_effect=lambda s: (s, True))
    uow.audio_segments.list_by_session = AsyncMock(return_value=[])
    uow.audio_segments.delete_by_session = AsyncMock()
    uow.locations.create = AsyncMock()
    uow.locations.get_recent_by_user = AsyncMock(return_value=[])
    uow.device_statuses.upsert = AsyncMock()
    uow.device_statuses.get = AsyncMock(return_value=None)
    uow.schedules.get_by_user = AsyncMock(return_value=None)
    uow.location_shares.get_active_by_user = AsyncMock(return_value=None)
    uow.location_shares.create = AsyncMock(side_effect=lambda s: s)
    uow.location_shares.deactivate_all = AsyncMock(return_value=0)
    uow.support_network.get_guardians = AsyncMock(return_value=[])
    uow.support_network.get_aggressor = AsyncMock(return_value=None)
    return uow


@pytest.fixture
def identity():
    return make_identity(id=uuid4())


@pytest.fixture
def caller(identity):
    return Caller(
        user_id=identity.id,
        email=identity.email,
        strength=AuthStrength.session,
        session_id=uuid4(),
        session_token="a" * 128,
    )


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 10, 15, 0, 0)


@pytest.fixture
def storage():
    return InMemoryObjectStorage()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def signer():
    return JwtUrlSigner("unit-test-secret", "http://media.test/")
