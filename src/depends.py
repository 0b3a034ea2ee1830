from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.database import build_engine
from src.adapter.services.jwt_url_signer import JwtUrlSigner
from src.adapter.services.local_object_storage import LocalObjectStorage
from src.adapter.services.outbound_dispatcher import HttpOutboundDispatcher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.object_storage import IObjectStorage
from src.app.services.outbound import IOutboundDispatcher, OutboundKind
from src.app.services.url_signer import IUrlSigner

engine = build_engine(ApplicationConfig.DB_URI)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

object_storage = LocalObjectStorage(ApplicationConfig.STORAGE_ROOT)

url_signer = JwtUrlSigner(ApplicationConfig.JWT_SECRET, ApplicationConfig.PUBLIC_BASE_URL)

outbound_dispatcher = HttpOutboundDispatcher(
    endpoints={
        OutboundKind.guardian_alert: ApplicationConfig.GUARDIAN_WEBHOOK_URL,
        OutboundKind.guardian_resolved: ApplicationConfig.GUARDIAN_WEBHOOK_URL,
        OutboundKind.emergency_voice: ApplicationConfig.VOICE_DISPATCH_URL,
        OutboundKind.transcription: ApplicationConfig.TRANSCRIPTION_WEBHOOK_URL,
    },
    timeout=ApplicationConfig.OUTBOUND_TIMEOUT_SECONDS,
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_object_storage() -> IObjectStorage:
    return object_storage


def get_outbound_dispatcher() -> IOutboundDispatcher:
    return outbound_dispatcher


def get_url_signer() -> IUrlSigner:
    return url_signer
