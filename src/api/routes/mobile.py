"""
Mobile action endpoint.

Every device call is a POST to /mobile-api carrying an `action`
discriminator; JSON bodies, or multipart when an audio file is attached.
"""

import logging
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Request, status
from starlette.datastructures import UploadFile
from pydantic import ValidationError

from libs.result import Error
from src.api.error import ClientError, ServerError, raise_for_error
from src.api.handlers import alerts, auth, monitoring, telemetry
from src.api.handlers.context import ActionContext, ActionSpec, UploadedFile
from src.api.utils.credentials import client_ip, extract_credential
from src.app.services.credentials import SESSION_ONLY, SESSION_OR_LEGACY
from src.app.services.object_storage import IObjectStorage
from src.app.services.outbound import IOutboundDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.url_signer import IUrlSigner
from src.app.use_cases.auth import ResolveCallerUseCase
from src.depends import (
    get_object_storage,
    get_outbound_dispatcher,
    get_unit_of_work,
    get_url_signer,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Mobile"])

AUDIO_FIELD = "audio"

ACTIONS = {
    # Public
    "loginCustomizado": ActionSpec(auth.login),
    "refresh_token": ActionSpec(auth.refresh_token),
    # Session token only
    "logoutMobile": ActionSpec(auth.logout, SESSION_ONLY),
    "validate_password": ActionSpec(auth.validate_password, SESSION_ONLY),
    "change_password": ActionSpec(auth.change_password, SESSION_ONLY),
    "change_coercion_password": ActionSpec(auth.change_coercion_password, SESSION_ONLY),
    "update_schedules": ActionSpec(monitoring.update_schedules, SESSION_ONLY),
    "pingMobile": ActionSpec(telemetry.ping, SESSION_ONLY),
    "reprocess_recording": ActionSpec(telemetry.reprocess_recording, SESSION_ONLY),
    # Session token or legacy e-mail identifier
    "syncConfigMobile": ActionSpec(monitoring.sync_config, SESSION_OR_LEGACY),
    "enviarLocalizacaoGPS": ActionSpec(telemetry.send_location, SESSION_OR_LEGACY),
    "acionarPanicoMobile": ActionSpec(alerts.trigger_panic, SESSION_OR_LEGACY),
    "cancelarPanicoMobile": ActionSpec(alerts.cancel_panic, SESSION_OR_LEGACY),
    "receberAudioMobile": ActionSpec(telemetry.receive_audio, SESSION_OR_LEGACY),
    "getAudioSignedUrl": ActionSpec(telemetry.audio_signed_url, SESSION_OR_LEGACY),
    "reportarStatusMonitoramento": ActionSpec(
        monitoring.report_monitoring_status, SESSION_OR_LEGACY
    ),
    "reportarStatusGravacao": ActionSpec(monitoring.report_recording_status, SESSION_OR_LEGACY),
}


async def read_body(request: Request) -> Tuple[dict, Optional[UploadedFile]]:
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        body = {}
        upload = None
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == AUDIO_FIELD:
                    upload = UploadedFile(
                        data=await value.read(),
                        filename=value.filename,
                        content_type=value.content_type,
                    )
                continue
            body[key] = value
        return body, upload

    try:
        body = await request.json()
    except ValueError:
        raise ClientError(Error("VALIDATION_ERROR", "JSON inválido"))
    if not isinstance(body, dict):
        raise ClientError(Error("VALIDATION_ERROR", "O corpo deve ser um objeto JSON"))
    return body, None


def _validation_error(exc: ValidationError) -> Error:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()))
    message = f"{field}: {first.get('msg', 'inválido')}" if field else "Dados inválidos"
    return Error("VALIDATION_ERROR", message)


@router.post("/mobile-api", status_code=status.HTTP_200_OK)
async def mobile_api(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IObjectStorage = Depends(get_object_storage),
    dispatcher: IOutboundDispatcher = Depends(get_outbound_dispatcher),
    signer: IUrlSigner = Depends(get_url_signer),
):
    """
    Mobile Action Router

    Resolves the caller according to the credential variants the action
    accepts, then runs its handler.

    Raises:
        - 400 Bad Request: Unknown action or invalid payload
        - 401/403/404/410/429: Mapped from the use case error code
        - 500 Internal Server Error: Storage or unexpected failure
    """
    body, upload = await read_body(request)

    action = body.get("action")
    if not action:
        raise ClientError(Error("INVALID_ACTION", "Campo 'action' é obrigatório"))
    entry = ACTIONS.get(action)
    if entry is None:
        raise ClientError(Error("INVALID_ACTION", f"Ação desconhecida: {action}"))

    ctx = ActionContext(
        body=body,
        uow=uow,
        storage=storage,
        dispatcher=dispatcher,
        signer=signer,
        ip_address=client_ip(request.headers, request.client.host if request.client else None),
        upload=upload,
    )

    try:
        if entry.accepted is not None:
            result = await ResolveCallerUseCase(uow).execute(
                extract_credential(body), entry.accepted
            )
            if result.is_err():
                raise_for_error(result.error)
            ctx.caller = result.value

        response = await entry.handler(ctx)
    except ValidationError as e:
        raise ClientError(_validation_error(e))
    except (ClientError, ServerError):
        raise
    except Exception:
        logger.exception("Unhandled error in mobile action %s", action)
        raise ServerError(Error("INTERNAL_ERROR", "Erro interno"))

    logger.info("Mobile action handled", extra={"action": action})
    return response
