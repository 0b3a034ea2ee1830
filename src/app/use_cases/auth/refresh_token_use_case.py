"""
Refresh Token Use Case

Single-use rotation of refresh credentials.
"""

from datetime import datetime
from typing import Callable, Optional

from libs.result import Error, Result, Return
from src.app.services.token_vault import TokenVault
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from .dtos import RefreshTokenResponse, UserSummary


class RefreshTokenUseCase:
    """
    Use case for refresh token rotation.

    Business Rules:
    - Each refresh token rotates exactly once
    - Unknown, expired, revoked or already rotated tokens fail REFRESH_INVALID
    - Reuse of a rotated token is audited (and may revoke the chain)
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, refresh_token: str, ip_address: Optional[str] = None
    ) -> Result[RefreshTokenResponse]:
        async with self.uow:
            vault = TokenVault(self.uow, clock=self.clock)
            result = await vault.rotate(refresh_token, ip_address)

            if result.is_err():
                # Reuse detection writes an audit record even though the call fails
                await self.uow.commit()
                return result

            issued = result.value
            identity = await self.uow.identities.get_by_id(issued.user_id)
            if identity is None:
                return Return.err(Error("USER_NOT_FOUND", "Usuário não encontrado"))

            await self.uow.commit()

            return Return.ok(
                RefreshTokenResponse(
                    access_token=issued.session_token,
                    refresh_token=issued.refresh_token,
                    expires_at=issued.session_expires_at,
                    user=UserSummary.from_identity(identity),
                )
            )
