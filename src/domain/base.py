from datetime import UTC, datetime


def utc_now() -> datetime:
    """Naive UTC timestamp, the form stored in every DateTime column."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an incoming timestamp to naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
