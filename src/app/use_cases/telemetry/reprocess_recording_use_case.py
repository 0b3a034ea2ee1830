from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.credentials import Caller
from src.app.services.outbound import IOutboundDispatcher, OutboundKind, OutboundTask
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ReprocessResponse


class ReprocessRecordingUseCase:
    """
    Business Rules:
    - Only the owner of a segment may re-enqueue its transcription
    """

    def __init__(self, uow: UnitOfWork, dispatcher: IOutboundDispatcher):
        self.uow = uow
        self.dispatcher = dispatcher

    async def execute(self, caller: Caller, segment_id: str) -> Result[ReprocessResponse]:
        try:
            segment_uuid = UUID(segment_id)
        except (TypeError, ValueError):
            return Return.err(Error("SEGMENT_NOT_FOUND", "Gravação não encontrada"))

        async with self.uow:
            segment = await self.uow.audio_segments.get_by_id(segment_uuid)
            if segment is None or segment.user_id != caller.user_id:
                return Return.err(Error("SEGMENT_NOT_FOUND", "Gravação não encontrada"))

            self.dispatcher.enqueue(
                OutboundTask(
                    kind=OutboundKind.transcription,
                    payload={
                        "segment_id": str(segment.id),
                        "session_id": str(segment.monitor_session_id),
                        "user_id": str(caller.user_id),
                        "storage_key": segment.storage_key,
                        "reprocess": True,
                    },
                    context={"user_id": str(caller.user_id), "segment_id": str(segment.id)},
                )
            )

            return Return.ok(
                ReprocessResponse(
                    gravacao_id=str(segment.id),
                    message="Reprocessamento iniciado",
                    status="pendente",
                )
            )
