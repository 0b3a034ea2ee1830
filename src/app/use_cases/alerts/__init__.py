"""
Panic Alert Use Cases
"""

from .trigger_panic_use_case import TriggerPanicUseCase
from .cancel_panic_use_case import CancelPanicUseCase
from .dtos import (
    TriggerPanicCommand,
    CancelPanicCommand,
    TriggerPanicResponse,
    CancelPanicResponse,
)

__all__ = [
    "TriggerPanicUseCase",
    "CancelPanicUseCase",
    "TriggerPanicCommand",
    "CancelPanicCommand",
    "TriggerPanicResponse",
    "CancelPanicResponse",
]
