"""Domain records and the SQLModel storage table."""

from .habit import (
    CustomSchedule,
    DailySchedule,
    Habit,
    Schedule,
    TrackingType,
    WeeklySchedule,
    habit_from_dict,
    habit_to_dict,
)
from .records import (
    AppSettings,
    MemorableMoment,
    NotificationSettings,
    SleepEntry,
    UserProfile,
    WeightEntry,
)
from .storage import StorageBucket

__all__ = [
    "AppSettings",
    "CustomSchedule",
    "DailySchedule",
    "Habit",
    "MemorableMoment",
    "NotificationSettings",
    "Schedule",
    "SleepEntry",
    "StorageBucket",
    "TrackingType",
    "UserProfile",
    "WeeklySchedule",
    "WeightEntry",
    "habit_from_dict",
    "habit_to_dict",
]
