"""UTC datetime helpers.

Audit timestamps and soft-delete markers are always timezone-aware UTC.
SQLite hands back naive datetimes, so values read from storage pass
through ensure_utc before leaving the repository.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to a naive datetime (stored values are UTC); convert aware ones."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
