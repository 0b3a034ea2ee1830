from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class OutboundKind(str, Enum):
    guardian_alert = "guardian_alert"
    guardian_resolved = "guardian_resolved"
    emergency_voice = "emergency_voice"
    transcription = "transcription"


@dataclass
class OutboundTask:
    """A side effect to run after commit. Delivered at most once."""

    kind: OutboundKind
    payload: Dict[str, Any]
    # Logged with failures; never sent
    context: Dict[str, Any] = field(default_factory=dict)


class IOutboundDispatcher(ABC):
    """Fire-and-forget delivery of outbound tasks"""

    @abstractmethod
    def enqueue(self, task: OutboundTask) -> None:
        """Schedule delivery and return immediately; never raises for delivery failures"""
        pass
