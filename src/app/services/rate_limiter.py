import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import RateLimitAttempt

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = {"limit": 5, "window_minutes": 15}


class RateLimiter:
    """
    Sliding-window limiter keyed by (identifier, action type).

    Each check appends an attempt and commits it right away, so the record
    survives whatever the caller does next with the unit of work.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        limits: Optional[Dict[str, dict]] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.limits = limits if limits is not None else ApplicationConfig.RATE_LIMITS
        self.clock = clock

    async def hit(self, identifier: str, action_type: str) -> bool:
        """Record an attempt; returns False once the window already holds `limit` attempts."""
        rule = self.limits.get(action_type, DEFAULT_LIMIT)
        now = self.clock()
        since = now - timedelta(minutes=rule["window_minutes"])

        count = await self.uow.rate_limits.count_since(identifier, action_type, since)
        await self.uow.rate_limits.create(
            RateLimitAttempt(identifier=identifier, action_type=action_type, attempted_at=now)
        )
        await self.uow.commit()

        allowed = count < rule["limit"]
        if not allowed:
            logger.warning("Rate limit exceeded", extra={"action_type": action_type})
        return allowed
