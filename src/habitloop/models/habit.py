"""Habit tracking data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class TrackingType(str, Enum):
    """How a logged value is interpreted by quick-entry controls."""

    INCREMENT = "increment"
    COMPLETION = "completion"
    DURATION = "duration"
    QUANTITY = "quantity"


@dataclass(frozen=True, slots=True)
class DailySchedule:
    """Due on every calendar date."""

    type: str = field(default="daily", init=False)


@dataclass(frozen=True, slots=True)
class WeeklySchedule:
    """Due until ``frequency`` days of the Monday-start week have met target."""

    frequency: int = 1
    type: str = field(default="weekly", init=False)


@dataclass(frozen=True, slots=True)
class CustomSchedule:
    """Due on the listed weekday indices (0=Sunday .. 6=Saturday)."""

    days: frozenset[int] = frozenset()
    type: str = field(default="custom", init=False)


Schedule = Union[DailySchedule, WeeklySchedule, CustomSchedule]


@dataclass(slots=True)
class Habit:
    """A user-defined habit with a target, a schedule and per-day entries."""

    id: str
    name: str
    target: float
    unit: str = "times"
    icon: str = "checkmark-circle"
    tracking_type: TrackingType = TrackingType.QUANTITY
    is_target_flexible: bool = False
    quick_values: list[float] = field(default_factory=list)
    schedule: Optional[Schedule] = None
    category: Optional[str] = None
    entries: dict[str, float] = field(default_factory=dict)


def schedule_to_dict(schedule: Optional[Schedule]) -> Optional[dict[str, Any]]:
    if schedule is None:
        return None
    if isinstance(schedule, WeeklySchedule):
        return {"type": "weekly", "frequency": schedule.frequency}
    if isinstance(schedule, CustomSchedule):
        return {"type": "custom", "days": sorted(schedule.days)}
    return {"type": "daily"}


def schedule_from_dict(data: Optional[dict[str, Any]]) -> Optional[Schedule]:
    """Rebuild a schedule from its stored form.

    A missing weekly frequency (or zero) means once per week, matching how the
    creation form stores it.
    """
    if not data:
        return None
    kind = data.get("type")
    if kind == "daily":
        return DailySchedule()
    if kind == "weekly":
        return WeeklySchedule(frequency=int(data.get("frequency") or 1))
    if kind == "custom":
        return CustomSchedule(days=frozenset(int(day) for day in data.get("days") or ()))
    raise ValueError(f"Unknown schedule type: {kind!r}")


def habit_to_dict(habit: Habit) -> dict[str, Any]:
    """Serialize a habit to the JSON shape kept in the ``habits`` bucket."""

    payload: dict[str, Any] = {
        "id": habit.id,
        "name": habit.name,
        "icon": habit.icon,
        "target": habit.target,
        "unit": habit.unit,
        "trackingType": habit.tracking_type.value,
        "isTargetFlexible": habit.is_target_flexible,
        "quickValues": list(habit.quick_values),
        "entries": dict(habit.entries),
    }
    schedule = schedule_to_dict(habit.schedule)
    if schedule is not None:
        payload["schedule"] = schedule
    if habit.category is not None:
        payload["category"] = habit.category
    return payload


def habit_from_dict(data: dict[str, Any]) -> Habit:
    """Deserialize a stored habit; raises KeyError/ValueError/TypeError on bad data."""

    entries = {str(key): float(value) for key, value in (data.get("entries") or {}).items()}
    return Habit(
        id=str(data["id"]),
        name=str(data["name"]),
        target=float(data["target"]),
        unit=data.get("unit") or "times",
        icon=data.get("icon") or "checkmark-circle",
        tracking_type=TrackingType(data.get("trackingType") or TrackingType.QUANTITY.value),
        is_target_flexible=bool(data.get("isTargetFlexible", False)),
        quick_values=[float(v) for v in data.get("quickValues") or ()],
        schedule=schedule_from_dict(data.get("schedule")),
        category=data.get("category"),
        entries=entries,
    )


__all__ = [
    "CustomSchedule",
    "DailySchedule",
    "Habit",
    "Schedule",
    "TrackingType",
    "WeeklySchedule",
    "habit_from_dict",
    "habit_to_dict",
    "schedule_from_dict",
    "schedule_to_dict",
]
