"""
Use Cases

Organized by domain folder:
- auth/: Sessions, credentials and password changes
- alerts/: Panic trigger and cancellation
- monitoring/: Check-in, schedules and status reports
- telemetry/: Audio segments, locations and heartbeats
"""

from .auth import (
    LoginUseCase,
    RefreshTokenUseCase,
    ResolveCallerUseCase,
    LogoutUseCase,
    ValidatePasswordUseCase,
    ChangePasswordUseCase,
    ChangeCoercionPasswordUseCase,
)
from .alerts import TriggerPanicUseCase, CancelPanicUseCase
from .monitoring import (
    SyncConfigUseCase,
    UpdateSchedulesUseCase,
    ReportMonitoringStatusUseCase,
    ReportRecordingStatusUseCase,
)
from .telemetry import (
    ReceiveAudioUseCase,
    SendLocationUseCase,
    PingUseCase,
    AudioSignedUrlUseCase,
    ReprocessRecordingUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "RefreshTokenUseCase",
    "ResolveCallerUseCase",
    "LogoutUseCase",
    "ValidatePasswordUseCase",
    "ChangePasswordUseCase",
    "ChangeCoercionPasswordUseCase",
    # Alerts
    "TriggerPanicUseCase",
    "CancelPanicUseCase",
    # Monitoring
    "SyncConfigUseCase",
    "UpdateSchedulesUseCase",
    "ReportMonitoringStatusUseCase",
    "ReportRecordingStatusUseCase",
    # Telemetry
    "ReceiveAudioUseCase",
    "SendLocationUseCase",
    "PingUseCase",
    "AudioSignedUrlUseCase",
    "ReprocessRecordingUseCase",
]
