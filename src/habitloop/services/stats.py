"""Summary statistics for the dashboard, habit detail and history views."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from ..models.habit import Habit
from ..models.records import SleepEntry
from .dates import DAY_NAMES, iter_days, month_bounds, to_date_string, week_bounds, weekday_index
from .schedule import entry_value, is_completed_for_period, is_due
from .streaks import current_streak

OVERALL_STREAK_WINDOW_DAYS = 30
OVERALL_STREAK_THRESHOLD = 0.8
SLEEP_TREND_WINDOW = 3
SLEEP_TREND_MARGIN_HOURS = 0.5
DEFAULT_CATEGORY = "Other"


def _round_half_up(value: float, places: int = 0) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return int(_round_half_up(part / whole * 100))


@dataclass(slots=True)
class OverallStats:
    total_habits: int
    active_habits: int
    today_completion_rate: int
    current_streak: int


@dataclass(slots=True)
class DayProgress:
    date: date
    date_str: str
    is_scheduled: bool
    is_completed: bool
    value: float
    day_name: str


@dataclass(slots=True)
class HabitStats:
    habit: Habit
    total_entries: int
    total_value: float
    average_value: float
    streak: int
    weekly_progress: list[DayProgress] = field(default_factory=list)


@dataclass(slots=True)
class HistoryDay:
    date: date
    value: float
    has_entry: bool
    is_completed: bool


@dataclass(slots=True)
class MonthHistory:
    month_start: date
    days: list[HistoryDay]
    completed_days: int
    success_rate: int


@dataclass(slots=True)
class SleepStats:
    avg_hours: float
    avg_score: int
    recent_trend: str


def overall_stats(habits: Sequence[Habit], today: date) -> OverallStats:
    """Dashboard summary across all habits.

    The streak here counts back over days where at least 80% of the habits due
    that day were completed; days with nothing due are skipped.
    """

    due_today = [habit for habit in habits if is_due(habit, today)]
    completed_today = sum(1 for habit in due_today if is_completed_for_period(habit, today))

    streak = 0
    for offset in range(OVERALL_STREAK_WINDOW_DAYS):
        day = today - timedelta(days=offset)
        scheduled = [habit for habit in habits if is_due(habit, day)]
        if not scheduled:
            continue
        completed = sum(1 for habit in scheduled if is_completed_for_period(habit, day))
        if completed / len(scheduled) >= OVERALL_STREAK_THRESHOLD:
            streak += 1
        else:
            break

    return OverallStats(
        total_habits=len(habits),
        active_habits=len(due_today),
        today_completion_rate=_percent(completed_today, len(due_today)),
        current_streak=streak,
    )


def week_progress(habit: Habit, today: date) -> list[DayProgress]:
    """Monday-to-Sunday progress for the week containing ``today``."""

    start, end = week_bounds(today)
    progress = []
    for day in iter_days(start, end):
        scheduled = is_due(habit, day)
        progress.append(
            DayProgress(
                date=day,
                date_str=to_date_string(day),
                is_scheduled=scheduled,
                is_completed=scheduled and is_completed_for_period(habit, day),
                value=entry_value(habit, day),
                day_name=DAY_NAMES[weekday_index(day)],
            )
        )
    return progress


def habit_stats(habit: Habit, today: date) -> HabitStats:
    values = list(habit.entries.values())
    total_value = float(sum(values))
    average = _round_half_up(total_value / len(values), 1) if values else 0.0
    return HabitStats(
        habit=habit,
        total_entries=len(values),
        total_value=total_value,
        average_value=average,
        streak=current_streak(habit, today),
        weekly_progress=week_progress(habit, today),
    )


def group_by_category(stats: Iterable[HabitStats]) -> dict[str, list[HabitStats]]:
    grouped: dict[str, list[HabitStats]] = {}
    for item in stats:
        grouped.setdefault(item.habit.category or DEFAULT_CATEGORY, []).append(item)
    return grouped


def month_history(habit: Habit, anchor: date) -> MonthHistory:
    """Calendar view of the month containing ``anchor``.

    The success rate is the share of the month's days whose entry met target,
    regardless of the habit's schedule.
    """

    first, last = month_bounds(anchor)
    days = []
    for day in iter_days(first, last):
        value = entry_value(habit, day)
        days.append(
            HistoryDay(
                date=day,
                value=value,
                has_entry=value > 0,
                is_completed=value >= habit.target,
            )
        )
    completed = sum(1 for day in days if day.is_completed)
    return MonthHistory(
        month_start=first,
        days=days,
        completed_days=completed,
        success_rate=_percent(completed, len(days)),
    )


def sleep_stats(entries: Iterable[SleepEntry]) -> SleepStats:
    valid = [entry for entry in entries if entry.hours > 0]
    if not valid:
        return SleepStats(avg_hours=0.0, avg_score=0, recent_trend="stable")

    total_hours = sum(entry.hours for entry in valid)
    total_score = sum(entry.score for entry in valid)

    newest_first = sorted(valid, key=lambda entry: entry.date, reverse=True)
    trend = "stable"
    recent = newest_first[:SLEEP_TREND_WINDOW]
    older = newest_first[SLEEP_TREND_WINDOW : SLEEP_TREND_WINDOW * 2]
    if len(recent) == SLEEP_TREND_WINDOW and older:
        avg_recent = sum(entry.hours for entry in recent) / len(recent)
        avg_older = sum(entry.hours for entry in older) / len(older)
        if avg_recent > avg_older + SLEEP_TREND_MARGIN_HOURS:
            trend = "improving"
        elif avg_recent < avg_older - SLEEP_TREND_MARGIN_HOURS:
            trend = "declining"

    return SleepStats(
        avg_hours=_round_half_up(total_hours / len(valid), 1),
        avg_score=int(_round_half_up(total_score / len(valid))),
        recent_trend=trend,
    )


__all__ = [
    "DayProgress",
    "HabitStats",
    "HistoryDay",
    "MonthHistory",
    "OverallStats",
    "SleepStats",
    "group_by_category",
    "habit_stats",
    "month_history",
    "overall_stats",
    "sleep_stats",
    "week_progress",
]
