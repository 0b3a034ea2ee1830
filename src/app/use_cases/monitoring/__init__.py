"""
Monitoring Use Cases

Check-in, weekly schedule and client status reports.
"""

from .sync_config_use_case import SyncConfigUseCase
from .update_schedules_use_case import UpdateSchedulesUseCase
from .report_monitoring_status_use_case import ReportMonitoringStatusUseCase
from .report_recording_status_use_case import ReportRecordingStatusUseCase
from .dtos import (
    SyncConfigCommand,
    MonitoringStatusCommand,
    RecordingStatusCommand,
    SyncConfigResponse,
    UpdateSchedulesResponse,
    StatusReportResponse,
)

__all__ = [
    # Use Cases
    "SyncConfigUseCase",
    "UpdateSchedulesUseCase",
    "ReportMonitoringStatusUseCase",
    "ReportRecordingStatusUseCase",
    # DTOs - Commands
    "SyncConfigCommand",
    "MonitoringStatusCommand",
    "RecordingStatusCommand",
    # DTOs - Responses
    "SyncConfigResponse",
    "UpdateSchedulesResponse",
    "StatusReportResponse",
]
