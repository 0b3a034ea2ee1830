from abc import ABC, abstractmethod
from datetime import datetime

from src.domain.entities import RateLimitAttempt


class IRateLimitRepository(ABC):
    """Rate limit attempt repository interface - application layer"""

    @abstractmethod
    async def count_since(self, identifier: str, action_type: str, since: datetime) -> int:
        """Count attempts for (identifier, action) at or after `since`"""
        pass

    @abstractmethod
    async def create(self, attempt: RateLimitAttempt) -> RateLimitAttempt:
        """Append an attempt record"""
        pass
