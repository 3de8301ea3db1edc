"""
Daily activity streak calculation.

Instants are compared by their UTC calendar day. Naive datetimes are taken
to already be in UTC, which is how they come back from SQLite.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime


@dataclass(frozen=True)
class StreakUpdate:
    """Outcome of applying one streak-affecting action."""

    streak_days: int
    last_active_at: datetime | None
    day_changed: bool


def to_utc(instant: datetime) -> datetime:
    """Return the instant as an aware UTC datetime."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def activity_day(instant: datetime) -> date:
    """Truncate an instant to its UTC calendar day."""
    return to_utc(instant).date()


def advance_streak(
    last_active_at: datetime | None, now: datetime, current_streak: int
) -> StreakUpdate:
    """
    Apply one streak-affecting action happening at ``now``.

    Args:
        last_active_at: Instant of the previous streak-affecting action
        now: Instant of the current action
        current_streak: Streak before the action

    Returns:
        StreakUpdate with the new streak and last-active instant. Same-day
        repeats, and instants earlier than ``last_active_at``, leave both
        unchanged. The next day extends the streak by one, and any longer
        gap restarts it at one.
    """
    if last_active_at is None:
        return StreakUpdate(streak_days=1, last_active_at=now, day_changed=True)

    day_delta = (activity_day(now) - activity_day(last_active_at)).days
    if day_delta <= 0:
        return StreakUpdate(
            streak_days=current_streak, last_active_at=last_active_at, day_changed=False
        )

    streak = current_streak + 1 if day_delta == 1 else 1
    return StreakUpdate(streak_days=streak, last_active_at=now, day_changed=True)
