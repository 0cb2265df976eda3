"""Time window helpers for revenue reports.

Reports are computed against a fixed local offset (Istanbul, UTC+3, no DST).
Orders are stored with UTC timestamps, so every window is returned as a pair
of UTC instants forming a half-open interval ``[start, end)``.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

REPORT_PERIODS: tuple[str, ...] = ("daily", "weekly", "monthly")


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_date(now: datetime, utc_offset_hours: int) -> date:
    """Return the calendar date at ``now`` in the fixed-offset zone."""
    return (as_utc(now) + timedelta(hours=utc_offset_hours)).date()


def _local_midnight_utc(day: date, utc_offset_hours: int) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc) - timedelta(hours=utc_offset_hours)


def report_window(
    period: str | None,
    now: datetime,
    utc_offset_hours: int = 3,
    start_date: date | None = None,
    end_date: date | None = None,
) -> tuple[datetime, datetime]:
    """Return UTC bounds for a report period.

    ``weekly`` runs from Monday of the current local week up to the end of
    today. A custom range is used only when no named period is given; its end
    date is inclusive. With neither, the window is today.
    """
    today = local_date(now, utc_offset_hours)

    if period == "daily":
        first, last = today, today + timedelta(days=1)
    elif period == "weekly":
        first, last = today - timedelta(days=today.weekday()), today + timedelta(days=1)
    elif period == "monthly":
        first = today.replace(day=1)
        last = (first + timedelta(days=32)).replace(day=1)
    elif start_date is not None and end_date is not None:
        if end_date < start_date:
            raise ValueError("endDate must not be before startDate")
        first, last = start_date, end_date + timedelta(days=1)
    else:
        first, last = today, today + timedelta(days=1)

    return _local_midnight_utc(first, utc_offset_hours), _local_midnight_utc(last, utc_offset_hours)


def in_window(value: datetime | None, window: tuple[datetime, datetime]) -> bool:
    if value is None:
        return False
    start, end = window
    return start <= as_utc(value) < end
