from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.access_session_repository import AccessSessionRepository
from src.adapter.repositories.audio_segment_repository import AudioSegmentRepository
from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.device_status_repository import DeviceStatusRepository
from src.adapter.repositories.identity_repository import IdentityRepository
from src.adapter.repositories.location_repository import LocationRepository
from src.adapter.repositories.location_share_repository import LocationShareRepository
from src.adapter.repositories.monitoring_session_repository import (
    MonitoringSessionRepository,
)
from src.adapter.repositories.panic_alert_repository import PanicAlertRepository
from src.adapter.repositories.rate_limit_repository import RateLimitRepository
from src.adapter.repositories.refresh_token_repository import RefreshTokenRepository
from src.adapter.repositories.schedule_repository import ScheduleRepository
from src.adapter.repositories.support_network_repository import (
    SupportNetworkRepository,
)
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.identities = IdentityRepository(self.session)
        self.access_sessions = AccessSessionRepository(self.session)
        self.refresh_tokens = RefreshTokenRepository(self.session)
        self.rate_limits = RateLimitRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        self.panic_alerts = PanicAlertRepository(self.session)
        self.monitoring_sessions = MonitoringSessionRepository(self.session)
        self.audio_segments = AudioSegmentRepository(self.session)
        self.locations = LocationRepository(self.session)
        self.device_statuses = DeviceStatusRepository(self.session)
        self.schedules = ScheduleRepository(self.session)
        self.location_shares = LocationShareRepository(self.session)
        self.support_network = SupportNetworkRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
