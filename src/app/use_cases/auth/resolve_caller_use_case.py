"""
Resolve Caller Use Case

Turns the credential presented with a request into a Caller.
"""

from datetime import datetime
from typing import Callable, FrozenSet, Optional

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.credentials import (
    AuthStrength,
    Caller,
    Credential,
    LegacyIdentifierCredential,
    SessionTokenCredential,
)
from src.app.services.token_vault import TokenVault
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import IdentityStatus


class ResolveCallerUseCase:
    """
    Business Rules:
    - Each action accepts a fixed set of credential variants
    - Session tokens must be live; the bound identity must be ativo
    - Legacy identifier mode can be switched off by configuration
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utc_now,
        legacy_enabled: Optional[bool] = None,
    ):
        self.uow = uow
        self.clock = clock
        if legacy_enabled is None:
            legacy_enabled = ApplicationConfig.LEGACY_IDENTIFIER_AUTH_ENABLED
        self.legacy_enabled = legacy_enabled

    async def execute(
        self, credential: Optional[Credential], accepted: FrozenSet[type]
    ) -> Result[Caller]:
        if credential is None:
            return Return.err(Error("CREDENTIAL_REQUIRED", "Credencial obrigatória"))

        if type(credential) not in accepted:
            return Return.err(Error("CREDENTIAL_REQUIRED", "session_token obrigatório"))

        async with self.uow:
            if isinstance(credential, SessionTokenCredential):
                vault = TokenVault(self.uow, clock=self.clock)
                result = await vault.validate(credential.token)
                if result.is_err():
                    return result

                session = result.value
                identity = await self.uow.identities.get_by_id(session.user_id)
                if identity is None:
                    return Return.err(Error("SESSION_INVALID", "Sessão inválida ou expirada"))
                strength = AuthStrength.session
                session_id = session.id
                token = credential.token

            elif isinstance(credential, LegacyIdentifierCredential):
                if not self.legacy_enabled:
                    return Return.err(
                        Error("CREDENTIAL_REQUIRED", "session_token obrigatório")
                    )
                identity = await self.uow.identities.get_by_email(credential.email)
                if identity is None:
                    return Return.err(Error("USER_NOT_FOUND", "Usuário não encontrado"))
                strength = AuthStrength.legacy_identifier
                session_id = None
                token = None

            else:
                return Return.err(Error("CREDENTIAL_REQUIRED", "Credencial obrigatória"))

            if identity.status != IdentityStatus.ativo:
                return Return.err(Error("ACCOUNT_INACTIVE", "Conta inativa ou bloqueada"))

            return Return.ok(
                Caller(
                    user_id=identity.id,
                    email=identity.email,
                    strength=strength,
                    session_id=session_id,
                    session_token=token,
                )
            )
