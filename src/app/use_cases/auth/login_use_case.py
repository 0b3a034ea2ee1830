"""
Login Use Case

Authenticates an identity with either of its passwords and issues a
session + refresh pair.
"""

import logging
from datetime import datetime
from typing import Callable

from libs.result import Error, Result, Return
from src.app.services.authenticator import authenticate
from src.app.services.rate_limiter import RateLimiter
from src.app.services.token_vault import TokenVault
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, AuthTag, IdentityStatus
from .dtos import LoginCommand, LoginResponse, SessionInfo, UserSummary

logger = logging.getLogger(__name__)

UNINSTALL_ACTION = "desinstalacao"


class LoginUseCase:
    """
    Use case for device login.

    Business Rules:
    - Rate limited per email:ip before any password comparison
    - Unknown email and wrong password fail identically
    - A coercion-password match logs in normally but is tagged coacao
      and leaves a silent audit record
    - Account must be ativo
    - Updates last access and audits the login
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, command: LoginCommand) -> Result[LoginResponse]:
        email = command.email.strip().lower()
        if not email or not command.password:
            return Return.err(Error("VALIDATION_ERROR", "Email e senha são obrigatórios"))

        async with self.uow:
            limiter = RateLimiter(self.uow, clock=self.clock)
            if not await limiter.hit(f"{email}:{command.ip_address}", "login_mobile"):
                return Return.err(
                    Error("RATE_LIMITED", "Muitas tentativas. Aguarde 15 minutos")
                )

            identity = await self.uow.identities.get_by_email(email)
            tag = authenticate(identity, command.password)

            if tag == AuthTag.invalid:
                if identity is not None:
                    await self.uow.audit_events.create(
                        AuditEvent(
                            user_id=identity.id,
                            action="login_mobile_failed",
                            success=False,
                            ip_address=command.ip_address,
                            event_metadata={"reason": "wrong_password"},
                        )
                    )
                    await self.uow.commit()
                return Return.err(Error("INVALID_CREDENTIALS", "Email ou senha incorretos"))

            if identity.status != IdentityStatus.ativo:
                return Return.err(Error("ACCOUNT_INACTIVE", "Conta inativa ou bloqueada"))

            if tag == AuthTag.duress:
                logger.debug("Silent coercion login recorded")
                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=identity.id,
                        action="coacao_login",
                        ip_address=command.ip_address,
                        event_metadata={"silent": True},
                    )
                )

            if command.action_type == UNINSTALL_ACTION:
                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=identity.id,
                        action="app_desinstalacao",
                        ip_address=command.ip_address,
                    )
                )

            vault = TokenVault(self.uow, clock=self.clock)
            issued = await vault.issue(identity.id, command.ip_address)

            identity.last_access_at = self.clock()
            await self.uow.identities.update(identity)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=identity.id,
                    action="login_mobile_success",
                    ip_address=command.ip_address,
                )
            )

            await self.uow.commit()

            return Return.ok(
                LoginResponse(
                    usuario=UserSummary.from_identity(identity),
                    loginTipo=tag.value,
                    session=SessionInfo(
                        token=issued.session_token, expires_at=issued.session_expires_at
                    ),
                    refresh_token=issued.refresh_token,
                )
            )
