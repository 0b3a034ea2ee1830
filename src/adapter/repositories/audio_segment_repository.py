from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audio_segment_repository import IAudioSegmentRepository
from src.domain.entities import AudioSegment


class AudioSegmentRepository(IAudioSegmentRepository):
    """Audio segment repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, segment_id: UUID) -> Optional[AudioSegment]:
        """Get segment by ID"""
        stmt = select(AudioSegment).where(AudioSegment.id == segment_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_session_and_index(
        self, session_id: UUID, segment_index: int
    ) -> Optional[AudioSegment]:
        """Get the segment at (session, index)"""
        stmt = select(AudioSegment).where(
            AudioSegment.monitor_session_id == session_id,
            AudioSegment.segment_index == segment_index,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create_if_absent(self, segment: AudioSegment) -> Tuple[AudioSegment, bool]:
        """Insert inside a SAVEPOINT; a (session, index) conflict returns the winner"""
        try:
            async with self.session.begin_nested():
                self.session.add(segment)
                await self.session.flush()
        except IntegrityError:
            if segment.segment_index is None:
                raise
            existing = await self.get_by_session_and_index(
                segment.monitor_session_id, segment.segment_index
            )
            if existing is None:
                raise
            return existing, False

        await self.session.refresh(segment)
        return segment, True

    async def list_by_session(self, session_id: UUID) -> List[AudioSegment]:
        """Get all segments of a session"""
        stmt = select(AudioSegment).where(AudioSegment.monitor_session_id == session_id)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_by_session(self, session_id: UUID) -> int:
        """Delete all segment rows of a session"""
        stmt = (
            delete(AudioSegment)
            .where(AudioSegment.monitor_session_id == session_id)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
