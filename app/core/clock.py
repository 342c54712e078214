"""Time helpers."""

import datetime


def utcnow() -> datetime.datetime:
    """Timezone-aware current UTC time."""
    return datetime.datetime.now(datetime.timezone.utc)


def as_utc(value: datetime.datetime) -> datetime.datetime:
    """Attach UTC to naive timestamps read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value
