import logging
import mimetypes

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from libs.result import Error
from src.api.error import ClientError, ServerError
from src.app.services.object_storage import IObjectStorage, StorageError
from src.app.services.url_signer import IUrlSigner, LinkExpiredError, LinkInvalidError
from src.depends import get_object_storage, get_url_signer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Media"])


@router.get("/media/{key:path}")
async def download_media(
    key: str,
    token: str = Query(..., description="Signed media token"),
    storage: IObjectStorage = Depends(get_object_storage),
    signer: IUrlSigner = Depends(get_url_signer),
):
    """
    Signed Media Download

    Raises:
        - 401 Unauthorized: Invalid token or key mismatch
        - 404 Not Found: Object missing
        - 410 Gone: Link expired
        - 500 Internal Server Error: Object could not be read
    """
    try:
        signer.verify(token, key)
    except LinkExpiredError:
        raise ClientError(Error("LINK_EXPIRED", "Link expirado"), status_code=status.HTTP_410_GONE)
    except LinkInvalidError:
        raise ClientError(
            Error("LINK_INVALID", "Link inválido"), status_code=status.HTTP_401_UNAUTHORIZED
        )

    try:
        data = await storage.get(key)
    except StorageError as e:
        logger.error("Failed to read object: %s", e)
        raise ServerError(Error("STORAGE_FAILED", "Falha ao ler o arquivo"))

    if data is None:
        raise ClientError(
            Error("NOT_FOUND", "Arquivo não encontrado"), status_code=status.HTTP_404_NOT_FOUND
        )

    media_type = mimetypes.guess_type(key)[0] or "application/octet-stream"
    return Response(content=data, media_type=media_type)
