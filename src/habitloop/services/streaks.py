"""Current-streak calculation for habits of every schedule type."""

from __future__ import annotations

from datetime import date, timedelta

from ..models.habit import CustomSchedule, DailySchedule, Habit, WeeklySchedule
from .schedule import is_completed_for_period, is_due, meets_target

# Safety caps on the backward walk; generous enough for any realistic streak.
MAX_STREAK_DAYS = 365
MAX_STREAK_WEEKS = 52


def _daily_streak(habit: Habit, today: date, *, scheduled_only: bool) -> int:
    streak = 0
    for offset in range(MAX_STREAK_DAYS):
        day = today - timedelta(days=offset)
        if scheduled_only and not is_due(habit, day):
            continue
        if meets_target(habit, day):
            streak += 1
        elif offset > 0:
            break
        # today not done yet does not end the streak
    return streak


def _weekly_streak(habit: Habit, today: date) -> int:
    streak = 0
    for offset in range(MAX_STREAK_WEEKS):
        anchor = today - timedelta(days=7 * offset)
        if is_completed_for_period(habit, anchor):
            streak += 1
        elif offset > 0:
            break
    return streak


def current_streak(habit: Habit, today: date) -> int:
    """Return the habit's current streak ending at ``today``.

    Daily habits count consecutive completed days, custom habits count
    consecutive completed scheduled days, weekly habits count consecutive weeks
    whose quota was met. The current day (or week) is included only once it is
    satisfied; leaving it unfinished never resets the streak.
    """

    schedule = habit.schedule
    if schedule is None or isinstance(schedule, DailySchedule):
        return _daily_streak(habit, today, scheduled_only=False)
    if isinstance(schedule, CustomSchedule):
        return _daily_streak(habit, today, scheduled_only=True)
    if isinstance(schedule, WeeklySchedule):
        return _weekly_streak(habit, today)
    raise TypeError(f"Unsupported schedule: {schedule!r}")


__all__ = ["MAX_STREAK_DAYS", "MAX_STREAK_WEEKS", "current_streak"]
