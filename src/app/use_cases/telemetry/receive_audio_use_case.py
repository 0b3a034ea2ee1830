"""
Receive Audio Use Case

Idempotent audio-segment ingestion into the ativa monitoring session.
"""

import logging
import re
from datetime import datetime
from pathlib import PurePath
from typing import Callable, Optional
from uuid import uuid4

from libs.result import Error, Result, Return
from src.app.services.credentials import Caller
from src.app.services.object_storage import IObjectStorage, StorageError
from src.app.services.outbound import IOutboundDispatcher, OutboundKind, OutboundTask
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AudioSegment
from .dtos import ReceiveAudioCommand, ReceiveAudioResponse

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "m4a"
_EXTENSION_RE = re.compile(r"^[a-z0-9]{1,8}$")


def extension_for(filename: Optional[str]) -> str:
    if not filename:
        return DEFAULT_EXTENSION
    suffix = PurePath(filename).suffix.lstrip(".").lower()
    return suffix if _EXTENSION_RE.match(suffix) else DEFAULT_EXTENSION


def segment_key(user_id, received_at: datetime, segment_id, extension: str) -> str:
    """user_id/YYYY-MM-DD/segment_id.ext (UTC date)"""
    return f"{user_id}/{received_at:%Y-%m-%d}/{segment_id}.{extension}"


class ReceiveAudioUseCase:
    """
    Use case for audio segment upload.

    Business Rules:
    - Requires an ativa monitoring session for (identity[, device])
    - A known (session, index) returns the existing segment untouched
    - The object is stored before the metadata row; a storage failure
      leaves no row behind
    - A concurrent duplicate returns the winner and removes the loser's object
    - A transcription task is enqueued for every new segment
    """

    def __init__(
        self,
        uow: UnitOfWork,
        storage: IObjectStorage,
        dispatcher: IOutboundDispatcher,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.storage = storage
        self.dispatcher = dispatcher
        self.clock = clock

    async def execute(
        self, caller: Caller, command: ReceiveAudioCommand
    ) -> Result[ReceiveAudioResponse]:
        if command.payload is None and not command.storage_path:
            return Return.err(
                Error("VALIDATION_ERROR", "Envie o arquivo de áudio ou file_url/storage_path")
            )

        async with self.uow:
            session = await self.uow.monitoring_sessions.get_active(
                caller.user_id, command.device_id
            )
            if session is None:
                return Return.err(
                    Error("SESSION_REQUIRED", "Nenhuma sessão de monitoramento ativa")
                )

            if command.segment_index is not None:
                existing = await self.uow.audio_segments.get_by_session_and_index(
                    session.id, command.segment_index
                )
                if existing is not None:
                    return Return.ok(self._response(existing, duplicate=True))

            now = self.clock()
            segment_id = uuid4()
            stored_object = False

            if command.payload is not None:
                key = segment_key(
                    caller.user_id, now, segment_id, extension_for(command.filename)
                )
                try:
                    await self.storage.put(key, command.payload, command.content_type)
                except StorageError:
                    logger.error(
                        "Audio segment storage failed",
                        extra={"user_id": str(caller.user_id), "session_id": str(session.id)},
                    )
                    return Return.err(Error("STORAGE_FAILED", "Falha ao armazenar o áudio"))
                stored_object = True
            else:
                key = command.storage_path

            segment, created = await self.uow.audio_segments.create_if_absent(
                AudioSegment(
                    id=segment_id,
                    monitor_session_id=session.id,
                    user_id=caller.user_id,
                    device_id=command.device_id or session.device_id,
                    segment_index=command.segment_index,
                    storage_key=key,
                    duration_seconds=command.duration_seconds,
                    size_mb=command.size_mb,
                    received_at=now,
                )
            )

            if not created:
                if stored_object:
                    await self._discard(key)
                return Return.ok(self._response(segment, duplicate=True))

            await self.uow.commit()

            self.dispatcher.enqueue(
                OutboundTask(
                    kind=OutboundKind.transcription,
                    payload={
                        "segment_id": str(segment.id),
                        "session_id": str(session.id),
                        "user_id": str(caller.user_id),
                        "storage_key": segment.storage_key,
                    },
                    context={"user_id": str(caller.user_id), "segment_id": str(segment.id)},
                )
            )

            return Return.ok(self._response(segment, duplicate=False))

    async def _discard(self, key: str) -> None:
        try:
            await self.storage.delete(key)
        except StorageError:
            logger.warning("Duplicate segment object not removed", extra={"key": key})

    def _response(self, segment: AudioSegment, duplicate: bool) -> ReceiveAudioResponse:
        return ReceiveAudioResponse(
            segmento_id=str(segment.id),
            monitor_session_id=str(segment.monitor_session_id),
            storage_path=segment.storage_key,
            duplicado=duplicate,
            message="Segmento já recebido" if duplicate else "Segmento recebido",
        )
