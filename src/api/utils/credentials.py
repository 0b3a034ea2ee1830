from typing import Optional

from src.app.services.credentials import (
    Credential,
    LegacyIdentifierCredential,
    SessionTokenCredential,
)


def extract_credential(body: dict) -> Optional[Credential]:
    """Session token wins when both a token and an e-mail are present."""
    token = body.get("session_token")
    if isinstance(token, str) and token.strip():
        return SessionTokenCredential(token=token.strip())

    email = body.get("email_usuario")
    if isinstance(email, str) and email.strip():
        return LegacyIdentifierCredential(email=email.strip().lower())

    return None


def client_ip(headers, fallback: Optional[str] = None) -> str:
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return headers.get("cf-connecting-ip") or fallback or "unknown"
