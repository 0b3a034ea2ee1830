import secrets
import string
from datetime import datetime

PROTOCOL_PREFIX = "AMP"
PROTOCOL_ALPHABET = string.ascii_uppercase + string.digits
SHARE_CODE_ALPHABET = string.ascii_lowercase + string.digits


def generate_protocol(now: datetime) -> str:
    """AMP-YYYYMMDD-XXXXXX, date in UTC."""
    suffix = "".join(secrets.choice(PROTOCOL_ALPHABET) for _ in range(6))
    return f"{PROTOCOL_PREFIX}-{now:%Y%m%d}-{suffix}"


def generate_share_code(length: int = 8) -> str:
    return "".join(secrets.choice(SHARE_CODE_ALPHABET) for _ in range(length))
