from abc import ABC, abstractmethod


class LinkExpiredError(Exception):
    pass


class LinkInvalidError(Exception):
    pass


class IUrlSigner(ABC):
    """Time-limited download links for stored objects"""

    @abstractmethod
    def sign(self, key: str, ttl_seconds: int) -> str:
        """Return a public URL granting read access to `key` for `ttl_seconds`"""
        pass

    @abstractmethod
    def verify(self, token: str, key: str) -> None:
        """
        Check that a link token grants access to `key`

        Raises:
            LinkExpiredError: signature valid but past expiry
            LinkInvalidError: bad signature, malformed token or key mismatch
        """
        pass
