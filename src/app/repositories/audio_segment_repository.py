from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import AudioSegment


class IAudioSegmentRepository(ABC):
    """Audio segment repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, segment_id: UUID) -> Optional[AudioSegment]:
        """Get segment by ID"""
        pass

    @abstractmethod
    async def get_by_session_and_index(
        self, session_id: UUID, segment_index: int
    ) -> Optional[AudioSegment]:
        """Get the segment at an idempotency key"""
        pass

    @abstractmethod
    async def create_if_absent(self, segment: AudioSegment) -> Tuple[AudioSegment, bool]:
        """
        Insert a segment unless its (session, index) already exists.

        Returns:
            (segment, created) - the existing segment and False on conflict
        """
        pass

    @abstractmethod
    async def list_by_session(self, session_id: UUID) -> List[AudioSegment]:
        """Get all segments of a session"""
        pass

    @abstractmethod
    async def delete_by_session(self, session_id: UUID) -> int:
        """Delete all segment rows of a session. Returns count."""
        pass
