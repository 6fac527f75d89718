"""Consecutive-day login streak."""

from datetime import date, datetime, timezone


def next_streak(
    streak_days: int, last_login: datetime | None, now: datetime
) -> int | None:
    """Compute the streak after a login at ``now``.

    Days are UTC calendar days. Naive values (SQLite hands them back
    without an offset) are taken to be UTC already.

    Returns:
        The new streak, or None when the user already logged in today and
        nothing needs to be written.
    """
    if last_login is None:
        return 1
    gap = (_utc_day(now) - _utc_day(last_login)).days
    if gap <= 0:
        return None
    if gap == 1:
        return (streak_days or 0) + 1
    return 1


def _utc_day(value: datetime) -> date:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).date()
