"""Time helpers.

Single place where the pipeline reads the wall clock, so tests can pin it.
"""

from datetime import UTC, datetime


def now_utc() -> datetime:
    """Get current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to aware UTC.

    Naive datetimes are assumed to already be in UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
