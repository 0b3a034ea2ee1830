from dataclasses import dataclass
from typing import Awaitable, Callable, FrozenSet, Optional

from pydantic import BaseModel

from src.app.services.credentials import Caller
from src.app.services.object_storage import IObjectStorage
from src.app.services.outbound import IOutboundDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.url_signer import IUrlSigner


@dataclass
class UploadedFile:
    data: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None


@dataclass
class ActionContext:
    """Everything a mobile action handler may need for one request"""

    body: dict
    uow: UnitOfWork
    storage: IObjectStorage
    dispatcher: IOutboundDispatcher
    signer: IUrlSigner
    ip_address: str
    caller: Optional[Caller] = None
    upload: Optional[UploadedFile] = None


Handler = Callable[[ActionContext], Awaitable[BaseModel]]


@dataclass(frozen=True)
class ActionSpec:
    handler: Handler
    # None marks a public action
    accepted: Optional[FrozenSet[type]] = None
