from __future__ import annotations
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current wall-clock time as an aware UTC datetime.

    Microseconds are truncated to milliseconds, the precision BSON dates
    store, so a value read back from MongoDB compares equal to the one
    written.
    """
    return truncate_to_ms(datetime.now(timezone.utc))


def truncate_to_ms(dt: datetime) -> datetime:
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


def as_utc(dt: datetime) -> datetime:
    # pymongo hands back naive datetimes (UTC) unless tz_aware=True
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def ms_to_dt_utc(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)


def ms_to_utc_iso(ms: int) -> str:
    """Return ISO-8601 string of the given epoch ms in UTC."""
    return ms_to_dt_utc(ms).isoformat()

