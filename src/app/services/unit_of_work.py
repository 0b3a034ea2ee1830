from abc import ABC, abstractmethod

from src.app.repositories.access_session_repository import IAccessSessionRepository
from src.app.repositories.audio_segment_repository import IAudioSegmentRepository
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.device_status_repository import IDeviceStatusRepository
from src.app.repositories.identity_repository import IIdentityRepository
from src.app.repositories.location_repository import ILocationRepository
from src.app.repositories.location_share_repository import ILocationShareRepository
from src.app.repositories.monitoring_session_repository import (
    IMonitoringSessionRepository,
)
from src.app.repositories.panic_alert_repository import IPanicAlertRepository
from src.app.repositories.rate_limit_repository import IRateLimitRepository
from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.app.repositories.schedule_repository import IScheduleRepository
from src.app.repositories.support_network_repository import ISupportNetworkRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    identities: IIdentityRepository
    access_sessions: IAccessSessionRepository
    refresh_tokens: IRefreshTokenRepository
    rate_limits: IRateLimitRepository
    audit_events: IAuditEventRepository
    panic_alerts: IPanicAlertRepository
    monitoring_sessions: IMonitoringSessionRepository
    audio_segments: IAudioSegmentRepository
    locations: ILocationRepository
    device_statuses: IDeviceStatusRepository
    schedules: IScheduleRepository
    location_shares: ILocationShareRepository
    support_network: ISupportNetworkRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
