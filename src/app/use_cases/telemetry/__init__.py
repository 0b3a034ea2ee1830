"""
Telemetry Use Cases

Audio segment ingestion, location samples and device heartbeats.
"""

from .receive_audio_use_case import ReceiveAudioUseCase
from .send_location_use_case import SendLocationUseCase
from .ping_use_case import PingUseCase
from .audio_signed_url_use_case import AudioSignedUrlUseCase
from .reprocess_recording_use_case import ReprocessRecordingUseCase
from .dtos import (
    ReceiveAudioCommand,
    SendLocationCommand,
    PingCommand,
    ReceiveAudioResponse,
    SendLocationResponse,
    PingResponse,
    SignedUrlResponse,
    ReprocessResponse,
)

__all__ = [
    # Use Cases
    "ReceiveAudioUseCase",
    "SendLocationUseCase",
    "PingUseCase",
    "AudioSignedUrlUseCase",
    "ReprocessRecordingUseCase",
    # DTOs - Commands
    "ReceiveAudioCommand",
    "SendLocationCommand",
    "PingCommand",
    # DTOs - Responses
    "ReceiveAudioResponse",
    "SendLocationResponse",
    "PingResponse",
    "SignedUrlResponse",
    "ReprocessResponse",
]
