"""
Change Password Use Cases

Both password changes are routed through MUTATION_POLICY: a coercion
match returns the same success response without touching any hash.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable

from libs.result import Error, Result, Return
from src.app.services.authenticator import (
    MIN_PASSWORD_LENGTH,
    MutationPolicy,
    authenticate,
    hash_password,
    mutation_policy,
    verify_password,
)
from src.app.services.credentials import Caller
from src.app.services.rate_limiter import RateLimiter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AuditEvent, Identity
from .dtos import ChangePasswordCommand, MessageResponse

logger = logging.getLogger(__name__)


class _PasswordChange(ABC):
    action_type = ""
    success_message = ""

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    @abstractmethod
    def _conflicts(self, identity: Identity, new_password: str) -> bool:
        pass

    @abstractmethod
    def _apply(self, identity: Identity, new_password: str) -> None:
        pass

    async def execute(
        self, caller: Caller, command: ChangePasswordCommand
    ) -> Result[MessageResponse]:
        if len(command.new_password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"A nova senha deve ter no mínimo {MIN_PASSWORD_LENGTH} caracteres",
                )
            )

        async with self.uow:
            limiter = RateLimiter(self.uow, clock=self.clock)
            if not await limiter.hit(str(caller.user_id), self.action_type):
                return Return.err(
                    Error("RATE_LIMITED", "Muitas tentativas. Aguarde 15 minutos")
                )

            identity = await self.uow.identities.get_by_id(caller.user_id)
            policy = mutation_policy(authenticate(identity, command.current_password))

            if policy == MutationPolicy.reject:
                return Return.err(Error("INVALID_CREDENTIALS", "Senha atual incorreta"))

            if policy == MutationPolicy.simulate:
                logger.debug("Simulated password change")
                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=caller.user_id,
                        action=f"coacao_{self.action_type}",
                        ip_address=command.ip_address,
                        event_metadata={"silent": True},
                    )
                )
                await self.uow.commit()
                return Return.ok(MessageResponse(message=self.success_message))

            if self._conflicts(identity, command.new_password):
                return Return.err(
                    Error(
                        "INVALID_PASSWORD",
                        "A senha normal e a senha de coação devem ser diferentes",
                    )
                )

            self._apply(identity, command.new_password)
            await self.uow.identities.update(identity)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=caller.user_id,
                    action=self.action_type,
                    ip_address=command.ip_address,
                    event_metadata=caller.audit_metadata(),
                )
            )

            await self.uow.commit()

            return Return.ok(MessageResponse(message=self.success_message))


class ChangePasswordUseCase(_PasswordChange):
    """
    Business Rules:
    - Current password must match (normal or coercion)
    - Coercion match: identical success, no mutation, silent audit
    - New normal password must differ from the coercion password
    """

    action_type = "change_password"
    success_message = "Senha alterada com sucesso"

    def _conflicts(self, identity: Identity, new_password: str) -> bool:
        return verify_password(new_password, identity.duress_password_hash)

    def _apply(self, identity: Identity, new_password: str) -> None:
        identity.password_hash = hash_password(new_password)


class ChangeCoercionPasswordUseCase(_PasswordChange):
    """
    Business Rules:
    - Current password must match (normal or coercion)
    - Coercion match: identical success, no mutation, silent audit
    - New coercion password must differ from the normal password
    """

    action_type = "change_coercion_password"
    success_message = "Senha de coação alterada com sucesso"

    def _conflicts(self, identity: Identity, new_password: str) -> bool:
        return verify_password(new_password, identity.password_hash)

    def _apply(self, identity: Identity, new_password: str) -> None:
        identity.duress_password_hash = hash_password(new_password)
