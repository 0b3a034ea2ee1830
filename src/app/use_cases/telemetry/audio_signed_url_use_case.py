from typing import Optional
from uuid import UUID

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.credentials import Caller
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.url_signer import IUrlSigner
from .dtos import SignedUrlResponse


class AudioSignedUrlUseCase:
    """
    Business Rules:
    - The key must live under the caller's own prefix (user_id/...)
    - A segment id resolves to its storage key; other identities' segments are forbidden
    - Links expire after SIGNED_URL_TTL_SECONDS
    """

    def __init__(self, uow: UnitOfWork, signer: IUrlSigner, ttl_seconds: Optional[int] = None):
        self.uow = uow
        self.signer = signer
        self.ttl_seconds = ttl_seconds or ApplicationConfig.SIGNED_URL_TTL_SECONDS

    async def execute(
        self,
        caller: Caller,
        file_path: Optional[str] = None,
        segment_id: Optional[str] = None,
    ) -> Result[SignedUrlResponse]:
        if not file_path and not segment_id:
            return Return.err(Error("VALIDATION_ERROR", "Informe file_path ou gravacao_id"))

        async with self.uow:
            key = file_path
            if not key:
                try:
                    segment_uuid = UUID(segment_id)
                except ValueError:
                    return Return.err(Error("SEGMENT_NOT_FOUND", "Gravação não encontrada"))

                segment = await self.uow.audio_segments.get_by_id(segment_uuid)
                if segment is None:
                    return Return.err(Error("SEGMENT_NOT_FOUND", "Gravação não encontrada"))
                if segment.user_id != caller.user_id:
                    return Return.err(Error("FORBIDDEN", "Acesso negado"))
                key = segment.storage_key

            key = key.lstrip("/")
            if not key.startswith(f"{caller.user_id}/") or ".." in key.split("/"):
                return Return.err(Error("FORBIDDEN", "Acesso negado"))

            return Return.ok(
                SignedUrlResponse(
                    signed_url=self.signer.sign(key, self.ttl_seconds),
                    gravacao_id=segment_id,
                    storage_path=key,
                    expires_in_seconds=self.ttl_seconds,
                )
            )
