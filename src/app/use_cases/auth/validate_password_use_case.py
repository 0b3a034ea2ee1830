from datetime import datetime
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services.authenticator import authenticate
from src.app.services.credentials import Caller
from src.app.services.rate_limiter import RateLimiter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, AuthTag
from .dtos import ValidatePasswordResponse


class ValidatePasswordUseCase:
    """
    Business Rules:
    - Rate limited per user_id:ip
    - Reports whether the password is the normal or the coercion one
    - A coercion match leaves a silent audit record
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, caller: Caller, password: str, ip_address: Optional[str] = None
    ) -> Result[ValidatePasswordResponse]:
        async with self.uow:
            limiter = RateLimiter(self.uow, clock=self.clock)
            if not await limiter.hit(f"{caller.user_id}:{ip_address}", "validate_password"):
                return Return.err(
                    Error("RATE_LIMITED", "Muitas tentativas. Aguarde 15 minutos")
                )

            identity = await self.uow.identities.get_by_id(caller.user_id)
            tag = authenticate(identity, password)

            if tag == AuthTag.invalid:
                return Return.err(Error("INVALID_CREDENTIALS", "Senha incorreta"))

            if tag == AuthTag.duress:
                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=caller.user_id,
                        action="coacao_validate_password",
                        ip_address=ip_address,
                        event_metadata={"silent": True},
                    )
                )
                await self.uow.commit()

            return Return.ok(ValidatePasswordResponse(loginTipo=tag.value))
