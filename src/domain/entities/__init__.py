"""
Safety Core Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    IdentityStatus,
    AuthTag,
    AlertStatus,
    MonitoringStatus,
    SessionOrigin,
    DeviceConnectivity,
    MovementStatus,
)

# Export all entities
from .identity import Identity
from .access_session import AccessSession
from .refresh_token import RefreshToken
from .rate_limit_attempt import RateLimitAttempt
from .audit_event import AuditEvent
from .panic_alert import PanicAlert
from .monitoring_session import MonitoringSession
from .audio_segment import AudioSegment
from .location_sample import LocationSample
from .monitoring_schedule import MonitoringSchedule
from .device_status import DeviceStatus
from .location_share import LocationShare
from .support_network import Guardian, Aggressor

__all__ = [
    # Enums
    "IdentityStatus",
    "AuthTag",
    "AlertStatus",
    "MonitoringStatus",
    "SessionOrigin",
    "DeviceConnectivity",
    "MovementStatus",
    # Entities
    "Identity",
    "AccessSession",
    "RefreshToken",
    "RateLimitAttempt",
    "AuditEvent",
    "PanicAlert",
    "MonitoringSession",
    "AudioSegment",
    "LocationSample",
    "MonitoringSchedule",
    "DeviceStatus",
    "LocationShare",
    "Guardian",
    "Aggressor",
]
