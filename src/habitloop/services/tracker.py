"""In-memory habit collection backed by the key-value store.

The tracker owns every user document. It hydrates all buckets once via
``load()`` and writes the affected bucket after each mutation. Writes are
best-effort: a failed save is logged and the in-memory state is kept.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import replace
from datetime import date
from enum import Enum
from typing import Any, Callable, Iterable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from ..domain.repositories.storage import KeyValueStore
from ..logging_config import get_logger
from ..models.habit import Habit, Schedule, TrackingType, habit_from_dict, habit_to_dict
from ..models.records import (
    AppSettings,
    MemorableMoment,
    SleepEntry,
    UserProfile,
    WeightEntry,
)
from .dates import coerce_date, to_date_string
from .schedule import entry_value, is_completed_for_period, is_due
from .stats import SleepStats, sleep_stats
from .streaks import current_streak
from .templates import HabitTemplate

logger = get_logger("tracker")

T = TypeVar("T")

EDITABLE_FIELDS = frozenset(
    {
        "name",
        "icon",
        "target",
        "unit",
        "tracking_type",
        "is_target_flexible",
        "quick_values",
        "schedule",
        "category",
    }
)

_LOAD_ERRORS = (ValueError, KeyError, TypeError, AttributeError, SQLAlchemyError)
_SAVE_ERRORS = (ValueError, TypeError, OSError, SQLAlchemyError)


class Bucket(str, Enum):
    """Storage keys for each persisted collection."""

    HABITS = "habits"
    MOMENTS = "memorableMoments"
    SLEEP = "sleepData"
    WEIGHT = "weightData"
    PROFILE = "userProfile"
    SETTINGS = "appSettings"


def _new_habit_id() -> str:
    return uuid.uuid4().hex


def _validate_habit_fields(name: str, target: float) -> None:
    if not name or not name.strip():
        raise ValueError("Habit name is required")
    if target is None or float(target) <= 0:
        raise ValueError(f"Habit target must be positive, got {target!r}")


def _normalize_unit(unit: Optional[str]) -> str:
    return (unit or "").strip() or "times"


def _parse_list(raw: Any, parse: Callable[[dict], T]) -> list[T]:
    if not isinstance(raw, list):
        raise TypeError(f"Expected a JSON array, got {type(raw).__name__}")
    return [parse(item) for item in raw]


class HabitTracker:
    """Owns habits plus the moment, sleep, weight, profile and settings records."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        id_factory: Callable[[], str] = _new_habit_id,
    ) -> None:
        self.store = store
        self._new_id = id_factory
        self.habits: list[Habit] = []
        self.memorable_moments: list[MemorableMoment] = []
        self.sleep_data: list[SleepEntry] = []
        self.weight_data: list[WeightEntry] = []
        self.profile = self._default_profile()
        self.settings = AppSettings()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> "HabitTracker":
        """Hydrate every collection; a corrupt bucket falls back to its default."""

        self.habits = self._load_bucket(
            Bucket.HABITS, lambda raw: _parse_list(raw, habit_from_dict), list
        )
        self.memorable_moments = self._load_bucket(
            Bucket.MOMENTS, lambda raw: _parse_list(raw, MemorableMoment.from_dict), list
        )
        self.sleep_data = self._load_bucket(
            Bucket.SLEEP, lambda raw: _parse_list(raw, SleepEntry.from_dict), list
        )
        self.weight_data = self._load_bucket(
            Bucket.WEIGHT, lambda raw: _parse_list(raw, WeightEntry.from_dict), list
        )
        self.profile = self._load_bucket(
            Bucket.PROFILE, UserProfile.from_dict, self._default_profile
        )
        self.settings = self._load_bucket(Bucket.SETTINGS, AppSettings.from_dict, AppSettings)
        logger.info(
            "Loaded %d habits", len(self.habits), extra={"habit_count": len(self.habits)}
        )
        return self

    def _load_bucket(self, bucket: Bucket, parse: Callable[[Any], T], default: Callable[[], T]) -> T:
        try:
            raw = self.store.load(bucket.value)
            if raw is None:
                return default()
            return parse(raw)
        except _LOAD_ERRORS:
            logger.error(
                "Failed to load %s; starting with defaults", bucket.value, exc_info=True
            )
            return default()

    def _save(self, bucket: Bucket, payload: Any) -> None:
        try:
            self.store.save(bucket.value, payload)
        except _SAVE_ERRORS:
            logger.error("Failed to save %s", bucket.value, exc_info=True)

    def _save_habits(self) -> None:
        self._save(Bucket.HABITS, [habit_to_dict(habit) for habit in self.habits])

    @staticmethod
    def _default_profile() -> UserProfile:
        return UserProfile(join_date=to_date_string(date.today()))

    # ------------------------------------------------------------------
    # Habits
    # ------------------------------------------------------------------
    def get_habit(self, habit_id: str) -> Optional[Habit]:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None

    def add_habit(
        self,
        name: str,
        target: float,
        *,
        unit: Optional[str] = "times",
        icon: str = "checkmark-circle",
        tracking_type: TrackingType = TrackingType.QUANTITY,
        schedule: Optional[Schedule] = None,
        is_target_flexible: bool = False,
        quick_values: Iterable[float] = (),
        category: Optional[str] = None,
    ) -> Habit:
        """Create a habit with a fresh id and no entries."""

        _validate_habit_fields(name, target)
        habit = Habit(
            id=self._new_id(),
            name=name.strip(),
            target=float(target),
            unit=_normalize_unit(unit),
            icon=icon,
            tracking_type=TrackingType(tracking_type),
            is_target_flexible=is_target_flexible,
            quick_values=[float(value) for value in quick_values],
            schedule=schedule,
            category=category,
        )
        self.habits.append(habit)
        self._save_habits()
        logger.info("Added habit %s (%s)", habit.name, habit.id)
        return habit

    def add_habit_from_template(
        self, template: HabitTemplate, *, schedule: Optional[Schedule] = None
    ) -> Habit:
        return self.add_habit(
            template.name,
            template.target,
            unit=template.unit,
            icon=template.icon,
            tracking_type=template.tracking_type,
            schedule=schedule,
            is_target_flexible=template.is_target_flexible,
            quick_values=template.quick_values,
            category=template.category,
        )

    def update_habit(self, habit_id: str, **changes: Any) -> Optional[Habit]:
        """Replace editable fields of a habit; its id and entries are never touched."""

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot edit habit fields: {sorted(unknown)}")

        habit = self.get_habit(habit_id)
        if habit is None:
            logger.warning("Cannot update missing habit %s", habit_id)
            return None

        updated = replace(habit, **changes)
        _validate_habit_fields(updated.name, updated.target)
        updated.name = updated.name.strip()
        updated.unit = _normalize_unit(updated.unit)
        updated.target = float(updated.target)
        updated.tracking_type = TrackingType(updated.tracking_type)

        self.habits[self.habits.index(habit)] = updated
        self._save_habits()
        return updated

    def remove_habit(self, habit_id: str) -> bool:
        habit = self.get_habit(habit_id)
        if habit is None:
            return False
        self.habits.remove(habit)
        self._save_habits()
        logger.info("Removed habit %s (%s)", habit.name, habit.id)
        return True

    def record_entry(self, habit_id: str, on: date | str, value: float) -> bool:
        """Store ``value`` for ``on`` if the habit is due that day.

        Negative values are clamped to zero and, unless the habit's target is
        flexible, values above the target are capped at it. Returns False when
        the habit is missing or not due; nothing is written in that case.
        """

        habit = self.get_habit(habit_id)
        if habit is None:
            logger.warning("Cannot record entry for missing habit %s", habit_id)
            return False

        day = coerce_date(on)
        if not is_due(habit, day):
            logger.warning("Habit %s is not scheduled for %s", habit.name, to_date_string(day))
            return False

        amount = max(0, value)
        if not habit.is_target_flexible:
            amount = min(amount, habit.target)
        habit.entries[to_date_string(day)] = amount
        self._save_habits()
        return True

    def complete_habit(self, habit_id: str, on: date | str, value: Optional[float] = None) -> bool:
        """Quick entry: derive the value to record from the habit's tracking type."""

        habit = self.get_habit(habit_id)
        if habit is None:
            logger.warning("Cannot complete missing habit %s", habit_id)
            return False

        day = coerce_date(on)
        if habit.tracking_type is TrackingType.COMPLETION:
            amount = habit.target
        elif habit.tracking_type is TrackingType.INCREMENT:
            amount = entry_value(habit, day) + (value or 1)
        else:
            amount = value or habit.target
        return self.record_entry(habit_id, day, amount)

    def streak_for_habit(self, habit_id: str, today: date | None = None) -> int:
        habit = self.get_habit(habit_id)
        if habit is None:
            return 0
        return current_streak(habit, today or date.today())

    def is_due_today(self, habit_id: str, today: date | None = None) -> bool:
        habit = self.get_habit(habit_id)
        if habit is None:
            return False
        return is_due(habit, today or date.today())

    def is_completed_today(self, habit_id: str, today: date | None = None) -> bool:
        habit = self.get_habit(habit_id)
        if habit is None:
            return False
        return is_completed_for_period(habit, today or date.today())

    # ------------------------------------------------------------------
    # Journal records (one per date)
    # ------------------------------------------------------------------
    def add_memorable_moment(self, on: date | str, text: str) -> MemorableMoment:
        moment = MemorableMoment(date=to_date_string(coerce_date(on)), text=text)
        self._upsert_by_date(self.memorable_moments, moment)
        self._save(Bucket.MOMENTS, [item.to_dict() for item in self.memorable_moments])
        return moment

    def add_sleep_entry(self, on: date | str, hours: float, score: int) -> SleepEntry:
        entry = SleepEntry(
            date=to_date_string(coerce_date(on)),
            hours=hours,
            score=score,
            timestamp=int(time.time() * 1000),
        )
        self._upsert_by_date(self.sleep_data, entry)
        self._save(Bucket.SLEEP, [item.to_dict() for item in self.sleep_data])
        return entry

    def add_weight_entry(self, on: date | str, weight: float) -> WeightEntry:
        entry = WeightEntry(date=to_date_string(coerce_date(on)), weight=weight)
        self._upsert_by_date(self.weight_data, entry)
        self._save(Bucket.WEIGHT, [item.to_dict() for item in self.weight_data])
        return entry

    @staticmethod
    def _upsert_by_date(records: list, record) -> None:
        for index, existing in enumerate(records):
            if existing.date == record.date:
                records[index] = record
                return
        records.append(record)

    def sleep_stats(self) -> SleepStats:
        return sleep_stats(self.sleep_data)

    # ------------------------------------------------------------------
    # Profile, settings, reset
    # ------------------------------------------------------------------
    def update_profile(self, **changes: Any) -> UserProfile:
        self.profile = replace(self.profile, **changes)
        self._save(Bucket.PROFILE, self.profile.to_dict())
        return self.profile

    def update_settings(self, **changes: Any) -> AppSettings:
        self.settings = replace(self.settings, **changes)
        self._save(Bucket.SETTINGS, self.settings.to_dict())
        return self.settings

    def clear_all_data(self) -> None:
        """Drop every stored bucket and reset in-memory state to defaults."""

        try:
            self.store.remove(*(bucket.value for bucket in Bucket))
        except _SAVE_ERRORS:
            logger.error("Failed to clear stored data", exc_info=True)
            return
        self.habits = []
        self.memorable_moments = []
        self.sleep_data = []
        self.weight_data = []
        self.profile = self._default_profile()
        self.settings = AppSettings()
        logger.info("Cleared all data")


__all__ = ["Bucket", "EDITABLE_FIELDS", "HabitTracker"]
