"""Schedule evaluation: is a habit due on a date, and is its period complete.

All functions are pure. Weekly due-ness depends on the entries already logged
in the same Monday-Sunday week, so results must never be cached across writes.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..models.habit import CustomSchedule, DailySchedule, Habit, Schedule, WeeklySchedule
from .dates import DAY_NAMES, iter_days, to_date_string, week_bounds, weekday_index

NOT_SCHEDULED_TEXT = "Not scheduled today"


def entry_value(habit: Habit, on: date) -> float:
    """Logged value for ``on``; days without an entry count as 0."""

    return habit.entries.get(to_date_string(on), 0)


def meets_target(habit: Habit, on: date) -> bool:
    return entry_value(habit, on) >= habit.target


def completed_days_in_week(habit: Habit, week_start: date, week_end: date) -> int:
    """Count dates in [week_start, week_end] whose entry reached the target."""

    return sum(1 for day in iter_days(week_start, week_end) if meets_target(habit, day))


def _weekly_completed(habit: Habit, on: date) -> int:
    week_start, week_end = week_bounds(on)
    return completed_days_in_week(habit, week_start, week_end)


def is_due(habit: Habit, on: date) -> bool:
    """Return True when the habit should be tracked on ``on``."""

    schedule = habit.schedule
    if schedule is None or isinstance(schedule, DailySchedule):
        return True
    if isinstance(schedule, CustomSchedule):
        return weekday_index(on) in schedule.days
    if isinstance(schedule, WeeklySchedule):
        return _weekly_completed(habit, on) < schedule.frequency
    raise TypeError(f"Unsupported schedule: {schedule!r}")


def is_completed_for_period(habit: Habit, on: date) -> bool:
    """Return True when the day (or, for weekly habits, the week) is satisfied.

    Custom-schedule days the habit is not due on count as complete so they do
    not drag down aggregate completion rates.
    """

    schedule = habit.schedule
    if schedule is None or isinstance(schedule, DailySchedule):
        return meets_target(habit, on)
    if isinstance(schedule, CustomSchedule):
        if not is_due(habit, on):
            return True
        return meets_target(habit, on)
    if isinstance(schedule, WeeklySchedule):
        return _weekly_completed(habit, on) >= schedule.frequency
    raise TypeError(f"Unsupported schedule: {schedule!r}")


def remaining_days_for_weekly(habit: Habit, on: date) -> int:
    """Days still needed this week for a weekly habit; 0 for other schedules."""

    if not isinstance(habit.schedule, WeeklySchedule):
        return 0
    return max(0, habit.schedule.frequency - _weekly_completed(habit, on))


def format_quantity(value: float) -> str:
    """Render 10.0 as ``10`` and 2.5 as ``2.5``."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def progress_text(habit: Habit, on: date) -> str:
    schedule = habit.schedule
    if isinstance(schedule, WeeklySchedule):
        completed = _weekly_completed(habit, on)
        return f"{completed} / {schedule.frequency} days this week"
    if isinstance(schedule, CustomSchedule) and not is_due(habit, on):
        return NOT_SCHEDULED_TEXT
    value = format_quantity(entry_value(habit, on))
    return f"{value} / {format_quantity(habit.target)} {habit.unit}"


def schedule_display_text(habit: Habit) -> str:
    schedule = habit.schedule
    if schedule is None or isinstance(schedule, DailySchedule):
        return "Daily"
    if isinstance(schedule, WeeklySchedule):
        plural = "s" if schedule.frequency > 1 else ""
        return f"{schedule.frequency} time{plural} per week"
    if isinstance(schedule, CustomSchedule) and schedule.days:
        return "Custom: " + ", ".join(DAY_NAMES[day] for day in sorted(schedule.days))
    return "Custom"


def create_schedule(
    schedule_type: str,
    frequency: Optional[int] = None,
    selected_days: Optional[Iterable[int]] = None,
) -> Schedule:
    """Build a schedule from creation-form fields; unknown types fall back to daily."""

    if schedule_type == "weekly":
        return WeeklySchedule(frequency=frequency or 1)
    if schedule_type == "custom":
        days = frozenset(selected_days or ())
        invalid = sorted(day for day in days if not 0 <= day <= 6)
        if invalid:
            raise ValueError(f"Weekday indices must be between 0 and 6, got {invalid}")
        return CustomSchedule(days=days)
    return DailySchedule()


__all__ = [
    "NOT_SCHEDULED_TEXT",
    "completed_days_in_week",
    "create_schedule",
    "entry_value",
    "format_quantity",
    "is_completed_for_period",
    "is_due",
    "meets_target",
    "progress_text",
    "remaining_days_for_weekly",
    "schedule_display_text",
]
