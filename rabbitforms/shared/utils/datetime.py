"""UTC helpers. Every timestamp the store writes or returns is timezone-aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime (used for published_at and submitted_at)."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a datetime read back from storage to aware UTC.

    Naive values are taken to be UTC already; SQLite returns them that way
    even for timezone-aware columns. None passes through.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
