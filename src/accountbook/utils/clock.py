"""Time source helpers."""

from datetime import datetime, UTC


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from storage.

    SQLite drops tzinfo on round-trip, so values loaded from it are naive
    but were written as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
