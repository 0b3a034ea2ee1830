from datetime import UTC, datetime, timedelta
from urllib.parse import quote

from jose import ExpiredSignatureError, JWTError, jwt

from src.app.services.url_signer import IUrlSigner, LinkExpiredError, LinkInvalidError

ALGORITHM = "HS256"


class JwtUrlSigner(IUrlSigner):
    """
    Signs storage keys as HS256 JWTs served by the /media route.

    The token carries the key and its expiry; the key in the URL must match.
    """

    def __init__(self, secret: str, public_base_url: str):
        self.secret = secret
        self.public_base_url = public_base_url.rstrip("/")

    def generate_token(self, key: str, ttl_seconds: int) -> str:
        now = datetime.now(UTC)
        payload = {
            "key": key,
            "exp": now + timedelta(seconds=ttl_seconds),
            "iat": now,
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def sign(self, key: str, ttl_seconds: int) -> str:
        token = self.generate_token(key, ttl_seconds)
        return f"{self.public_base_url}/media/{quote(key)}?token={token}"

    def verify(self, token: str, key: str) -> None:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError as e:
            raise LinkExpiredError("Link expirado") from e
        except JWTError as e:
            raise LinkInvalidError("Link inválido") from e

        if payload.get("key") != key:
            raise LinkInvalidError("Link inválido")
