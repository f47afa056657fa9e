"""Tests for the schedule evaluator (due-ness, period completion, progress text).

Dates are anchored on the week of Monday 2024-01-01 .. Sunday 2024-01-07.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from habitloop.models.habit import CustomSchedule, DailySchedule, WeeklySchedule
from habitloop.services.dates import iter_days
from habitloop.services.schedule import (
    NOT_SCHEDULED_TEXT,
    completed_days_in_week,
    create_schedule,
    is_completed_for_period,
    is_due,
    progress_text,
    remaining_days_for_weekly,
    schedule_display_text,
)

MONDAY = date(2024, 1, 1)
TUESDAY = date(2024, 1, 2)
WEDNESDAY = date(2024, 1, 3)
THURSDAY = date(2024, 1, 4)
FRIDAY = date(2024, 1, 5)
SUNDAY = date(2024, 1, 7)
NEXT_MONDAY = date(2024, 1, 8)


class TestDailySchedule:
    """Habits without a schedule (or with a daily one) are due every day."""

    @pytest.mark.parametrize("schedule", [None, DailySchedule()])
    def test_due_every_day(self, habit_factory, schedule):
        habit = habit_factory(schedule=schedule)
        for offset in range(14):
            assert is_due(habit, MONDAY + timedelta(days=offset))

    def test_completion_requires_target(self, habit_factory):
        habit = habit_factory(target=10, entries={"2024-01-01": 10, "2024-01-02": 9.5})

        assert is_completed_for_period(habit, MONDAY)
        assert not is_completed_for_period(habit, TUESDAY)
        assert not is_completed_for_period(habit, WEDNESDAY)

    def test_value_above_target_counts(self, habit_factory):
        habit = habit_factory(target=3, entries={"2024-01-01": 7})
        assert is_completed_for_period(habit, MONDAY)

    def test_round_trip_scenario(self, habit_factory):
        habit = habit_factory(
            target=10,
            unit="glasses",
            schedule=DailySchedule(),
            entries={"2024-01-01": 10, "2024-01-02": 10, "2024-01-03": 5},
        )
        assert not is_completed_for_period(habit, WEDNESDAY)
        assert progress_text(habit, WEDNESDAY) == "5 / 10 glasses"


class TestCustomSchedule:
    """Custom schedules are due on listed weekdays only."""

    def test_due_only_on_selected_weekdays(self, habit_factory):
        habit = habit_factory(schedule=CustomSchedule(days=frozenset({1, 3})))

        assert is_due(habit, MONDAY)
        assert not is_due(habit, TUESDAY)
        assert is_due(habit, WEDNESDAY)
        assert not is_due(habit, SUNDAY)

    def test_sunday_is_index_zero(self, habit_factory):
        habit = habit_factory(schedule=CustomSchedule(days=frozenset({0})))
        assert is_due(habit, SUNDAY)
        assert not is_due(habit, MONDAY)

    def test_non_scheduled_day_is_vacuously_complete(self, habit_factory):
        habit = habit_factory(target=5, schedule=CustomSchedule(days=frozenset({1, 3})))

        assert is_completed_for_period(habit, TUESDAY)
        assert is_completed_for_period(habit, SUNDAY)

    def test_scheduled_day_needs_target(self, habit_factory):
        habit = habit_factory(
            target=5,
            schedule=CustomSchedule(days=frozenset({1, 3})),
            entries={"2024-01-01": 5, "2024-01-03": 4},
        )
        assert is_completed_for_period(habit, MONDAY)
        assert not is_completed_for_period(habit, WEDNESDAY)

    def test_empty_days_never_due(self, habit_factory):
        habit = habit_factory(schedule=CustomSchedule())
        assert not any(is_due(habit, day) for day in iter_days(MONDAY, SUNDAY))


class TestWeeklySchedule:
    """Weekly habits are due until the week's quota of completed days is met."""

    def test_weekly_scenario(self, habit_factory):
        habit = habit_factory(
            target=1,
            schedule=WeeklySchedule(frequency=2),
            entries={"2024-01-02": 1, "2024-01-04": 1},
        )

        assert not is_due(habit, FRIDAY)
        assert is_due(habit, NEXT_MONDAY)

    def test_quota_met_applies_to_whole_week(self, habit_factory):
        habit = habit_factory(
            target=2,
            schedule=WeeklySchedule(frequency=2),
            entries={"2024-01-05": 2, "2024-01-06": 3},
        )
        for day in iter_days(MONDAY, SUNDAY):
            assert not is_due(habit, day)
            assert is_completed_for_period(habit, day)

    def test_due_changes_as_entries_are_added(self, habit_factory):
        habit = habit_factory(target=1, schedule=WeeklySchedule(frequency=1))

        assert is_due(habit, THURSDAY)
        assert not is_completed_for_period(habit, THURSDAY)

        habit.entries["2024-01-02"] = 1

        assert not is_due(habit, THURSDAY)
        assert is_completed_for_period(habit, THURSDAY)

    def test_partial_values_do_not_count(self, habit_factory):
        habit = habit_factory(
            target=10,
            schedule=WeeklySchedule(frequency=1),
            entries={"2024-01-01": 9, "2024-01-02": 9.9},
        )
        assert is_due(habit, FRIDAY)
        assert not is_completed_for_period(habit, FRIDAY)

    def test_week_boundaries_are_monday_to_sunday(self, habit_factory):
        habit = habit_factory(
            target=1,
            schedule=WeeklySchedule(frequency=1),
            entries={"2023-12-31": 1},  # Sunday of the previous week
        )
        assert not is_due(habit, date(2023, 12, 25))
        assert is_due(habit, MONDAY)

    def test_frequency_above_seven_is_never_satisfied(self, habit_factory):
        entries = {day.isoformat(): 1 for day in iter_days(MONDAY, SUNDAY)}
        habit = habit_factory(target=1, schedule=WeeklySchedule(frequency=8), entries=entries)

        assert is_due(habit, SUNDAY)
        assert not is_completed_for_period(habit, SUNDAY)

    def test_completed_days_in_week(self, habit_factory):
        habit = habit_factory(
            target=1,
            entries={"2024-01-01": 1, "2024-01-03": 0, "2024-01-07": 4, "2024-01-08": 1},
        )
        assert completed_days_in_week(habit, MONDAY, SUNDAY) == 2

    def test_remaining_days(self, habit_factory):
        habit = habit_factory(
            target=1,
            schedule=WeeklySchedule(frequency=3),
            entries={"2024-01-02": 1},
        )
        assert remaining_days_for_weekly(habit, FRIDAY) == 2
        assert remaining_days_for_weekly(habit, NEXT_MONDAY) == 3
        assert remaining_days_for_weekly(habit_factory(), FRIDAY) == 0


class TestProgressText:
    def test_daily_progress(self, habit_factory):
        habit = habit_factory(target=2000, unit="ml", entries={"2024-01-01": 750})
        assert progress_text(habit, MONDAY) == "750 / 2000 ml"
        assert progress_text(habit, TUESDAY) == "0 / 2000 ml"

    def test_fractional_values_are_kept(self, habit_factory):
        habit = habit_factory(target=3, unit="km", entries={"2024-01-01": 2.5})
        assert progress_text(habit, MONDAY) == "2.5 / 3 km"

    def test_custom_not_scheduled(self, habit_factory):
        habit = habit_factory(schedule=CustomSchedule(days=frozenset({1})))
        assert progress_text(habit, TUESDAY) == NOT_SCHEDULED_TEXT
        assert progress_text(habit, MONDAY) == "0 / 1 times"

    def test_weekly_progress(self, habit_factory):
        habit = habit_factory(
            target=1,
            schedule=WeeklySchedule(frequency=3),
            entries={"2024-01-02": 1, "2024-01-04": 1},
        )
        assert progress_text(habit, FRIDAY) == "2 / 3 days this week"


class TestScheduleDisplayText:
    @pytest.mark.parametrize(
        "schedule, expected",
        [
            (None, "Daily"),
            (DailySchedule(), "Daily"),
            (WeeklySchedule(frequency=1), "1 time per week"),
            (WeeklySchedule(frequency=3), "3 times per week"),
            (CustomSchedule(days=frozenset({3, 1})), "Custom: Mon, Wed"),
            (CustomSchedule(days=frozenset({6, 0})), "Custom: Sun, Sat"),
            (CustomSchedule(), "Custom"),
        ],
    )
    def test_display_text(self, habit_factory, schedule, expected):
        assert schedule_display_text(habit_factory(schedule=schedule)) == expected


class TestCreateSchedule:
    def test_weekly_defaults_to_once(self):
        assert create_schedule("weekly") == WeeklySchedule(frequency=1)
        assert create_schedule("weekly", frequency=0) == WeeklySchedule(frequency=1)
        assert create_schedule("weekly", frequency=4) == WeeklySchedule(frequency=4)

    def test_custom_days(self):
        assert create_schedule("custom", selected_days=[1, 3]) == CustomSchedule(
            days=frozenset({1, 3})
        )
        assert create_schedule("custom") == CustomSchedule()

    def test_invalid_weekday_rejected(self):
        with pytest.raises(ValueError):
            create_schedule("custom", selected_days=[1, 7])

    def test_unknown_type_falls_back_to_daily(self):
        assert create_schedule("daily") == DailySchedule()
        assert create_schedule("monthly") == DailySchedule()
