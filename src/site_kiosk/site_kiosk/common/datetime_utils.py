from __future__ import annotations

from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Format as ISO-8601 UTC with milliseconds, e.g. 2026-02-01T08:30:00.000Z.

    Fixed width, so string order equals chronological order.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def now_iso() -> str:
    return to_iso(now_utc())


def export_date(value: date | None = None) -> str:
    """YYYY-MM-DD used in export filenames."""
    value = value or now_utc().date()
    return value.strftime("%Y-%m-%d")
