"""
Token Vault

Issues, validates, revokes and rotates opaque session/refresh credentials.
Only SHA-256 digests are persisted; raw values leave the vault exactly once.
"""

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional
from uuid import UUID

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import AccessSession, AuditEvent, RefreshToken

logger = logging.getLogger(__name__)

TOKEN_BYTES = 64
RAW_TOKEN_LENGTH = TOKEN_BYTES * 2


def generate_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def hash_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode()).hexdigest()


class RefreshState(str, Enum):
    fresh = "fresh"
    already_rotated = "already_rotated"
    revoked = "revoked"
    expired = "expired"


def classify_refresh(token: RefreshToken, now: datetime) -> RefreshState:
    """A revoked token with a successor was rotated; reuse of it is a theft signal."""
    if token.revoked_at is not None:
        if token.replaced_by is not None:
            return RefreshState.already_rotated
        return RefreshState.revoked
    if token.expires_at <= now:
        return RefreshState.expired
    return RefreshState.fresh


@dataclass
class IssuedTokens:
    user_id: UUID
    session_id: UUID
    session_token: str
    session_expires_at: datetime
    refresh_id: UUID
    refresh_token: str
    refresh_expires_at: datetime


class TokenVault:
    """
    Works inside a unit of work the caller has already entered.
    Nothing here commits.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utc_now,
        session_ttl: Optional[timedelta] = None,
        refresh_ttl: Optional[timedelta] = None,
        revoke_chain_on_reuse: Optional[bool] = None,
    ):
        self.uow = uow
        self.clock = clock
        self.session_ttl = session_ttl or timedelta(hours=ApplicationConfig.SESSION_TTL_HOURS)
        self.refresh_ttl = refresh_ttl or timedelta(days=ApplicationConfig.REFRESH_TTL_DAYS)
        if revoke_chain_on_reuse is None:
            revoke_chain_on_reuse = ApplicationConfig.REVOKE_CHAIN_ON_REFRESH_REUSE
        self.revoke_chain_on_reuse = revoke_chain_on_reuse

    async def issue(self, user_id: UUID, ip_address: Optional[str] = None) -> IssuedTokens:
        """Create a Session + RefreshCredential pair from two independent tokens."""
        now = self.clock()
        raw_session = generate_token()
        raw_refresh = generate_token()

        session = await self.uow.access_sessions.create(
            AccessSession(
                user_id=user_id,
                token_hash=hash_token(raw_session),
                ip_address=ip_address,
                created_at=now,
                expires_at=now + self.session_ttl,
            )
        )
        refresh = await self.uow.refresh_tokens.create(
            RefreshToken(
                user_id=user_id,
                token_hash=hash_token(raw_refresh),
                ip_address=ip_address,
                created_at=now,
                expires_at=now + self.refresh_ttl,
            )
        )

        return IssuedTokens(
            user_id=user_id,
            session_id=session.id,
            session_token=raw_session,
            session_expires_at=session.expires_at,
            refresh_id=refresh.id,
            refresh_token=raw_refresh,
            refresh_expires_at=refresh.expires_at,
        )

    async def validate(self, raw_token: Optional[str]) -> Result[AccessSession]:
        if not raw_token:
            return Return.err(Error("SESSION_INVALID", "Invalid or expired session"))

        session = await self.uow.access_sessions.get_by_token_hash(hash_token(raw_token))
        if session is None or not session.is_live(self.clock()):
            return Return.err(Error("SESSION_INVALID", "Invalid or expired session"))

        return Return.ok(session)

    async def revoke(self, raw_token: str) -> bool:
        """Idempotent; False when the token was unknown or already revoked."""
        return await self.uow.access_sessions.revoke_by_token_hash(
            hash_token(raw_token), self.clock()
        )

    async def rotate(self, raw_refresh: str, ip_address: Optional[str] = None) -> Result[IssuedTokens]:
        """
        Single-use rotation.

        The old credential is claimed with a conditional UPDATE, so of two
        concurrent rotations only one receives a new pair.
        """
        invalid = Error("REFRESH_INVALID", "Invalid or expired refresh token")
        if not raw_refresh or len(raw_refresh) != RAW_TOKEN_LENGTH:
            return Return.err(invalid)

        token = await self.uow.refresh_tokens.get_by_token_hash(hash_token(raw_refresh))
        if token is None:
            return Return.err(invalid)

        now = self.clock()
        state = classify_refresh(token, now)

        if state == RefreshState.already_rotated:
            await self._handle_reuse(token, ip_address, now)
            return Return.err(invalid)
        if state != RefreshState.fresh:
            return Return.err(invalid)

        claimed = await self.uow.refresh_tokens.claim_for_rotation(token.id, now)
        if not claimed:
            return Return.err(invalid)

        issued = await self.issue(token.user_id, ip_address)
        await self.uow.refresh_tokens.set_replaced_by(token.id, issued.refresh_id)
        return Return.ok(issued)

    async def _handle_reuse(self, token: RefreshToken, ip_address: Optional[str], now: datetime):
        logger.warning(
            "Refresh token reuse detected",
            extra={"user_id": str(token.user_id), "refresh_id": str(token.id)},
        )
        metadata = {"refresh_id": str(token.id), "chain_revoked": self.revoke_chain_on_reuse}

        if self.revoke_chain_on_reuse:
            revoked_refresh = await self.uow.refresh_tokens.revoke_descendants(token.id, now)
            revoked_sessions = await self.uow.access_sessions.revoke_all_by_user_id(
                token.user_id, now
            )
            metadata.update(
                {"revoked_refresh_tokens": revoked_refresh, "revoked_sessions": revoked_sessions}
            )

        await self.uow.audit_events.create(
            AuditEvent(
                user_id=token.user_id,
                action="refresh_token_reuse",
                success=False,
                ip_address=ip_address,
                event_metadata=metadata,
            )
        )
