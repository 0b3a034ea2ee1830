from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Raised when an object cannot be written, read or removed"""


class IObjectStorage(ABC):
    """Durable blob storage addressed by key"""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        """Write an object, replacing any previous content"""
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[bytes]:
        """Read an object; None when absent"""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove an object; False when absent"""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether an object exists"""
        pass
