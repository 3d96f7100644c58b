from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """SQLite hands back naive datetimes; stored values are always UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def deadline_after(minutes: int, *, now: datetime | None = None) -> datetime:
    return (now or utcnow()) + timedelta(minutes=int(minutes))


def is_window_closed(to_end: datetime, *, now: datetime | None = None) -> bool:
    # The window closes at to_end itself: to_end == now counts as closed.
    return as_utc(to_end) <= (now or utcnow())


def has_expired(end_time: datetime, *, now: datetime | None = None) -> bool:
    return as_utc(end_time) <= (now or utcnow())
