"""Date-keyed journal records and singleton profile/settings documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class MemorableMoment:
    date: str
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MemorableMoment":
        return cls(date=str(data["date"]), text=str(data["text"]))


@dataclass(slots=True)
class SleepEntry:
    """Hours slept and a 0-100 sleep score for one night."""

    date: str
    hours: float
    score: int
    timestamp: int | None = None  # epoch millis of the last write

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"date": self.date, "hours": self.hours, "score": self.score}
        if self.timestamp is not None:
            payload["timestamp"] = self.timestamp
        return payload

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SleepEntry":
        timestamp = data.get("timestamp")
        return cls(
            date=str(data["date"]),
            hours=float(data["hours"]),
            score=int(data["score"]),
            timestamp=int(timestamp) if timestamp is not None else None,
        )


@dataclass(slots=True)
class WeightEntry:
    date: str
    weight: float

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeightEntry":
        return cls(date=str(data["date"]), weight=float(data["weight"]))


def _local_timezone_name() -> str:
    return datetime.now().astimezone().tzname() or "UTC"


@dataclass(slots=True)
class UserProfile:
    name: str = ""
    join_date: str = ""
    timezone: str = field(default_factory=_local_timezone_name)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "joinDate": self.join_date, "timezone": self.timezone}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        return cls(
            name=str(data.get("name", "")),
            join_date=str(data.get("joinDate", "")),
            timezone=str(data.get("timezone") or _local_timezone_name()),
        )


@dataclass(slots=True)
class NotificationSettings:
    enabled: bool = True
    reminder_time: str = "09:00"
    sound_enabled: bool = True


@dataclass(slots=True)
class AppSettings:
    """User preferences. ``week_starts_on`` is display-only; weeks are evaluated Monday-first."""

    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    theme: str = "light"
    week_starts_on: int = 1
    units: dict[str, str] = field(default_factory=lambda: {"weight": "kg", "distance": "km"})

    def to_dict(self) -> dict[str, Any]:
        return {
            "notifications": {
                "enabled": self.notifications.enabled,
                "reminderTime": self.notifications.reminder_time,
                "soundEnabled": self.notifications.sound_enabled,
            },
            "theme": self.theme,
            "weekStartsOn": self.week_starts_on,
            "units": dict(self.units),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppSettings":
        defaults = cls()
        notifications = data.get("notifications") or {}
        return cls(
            notifications=NotificationSettings(
                enabled=bool(notifications.get("enabled", defaults.notifications.enabled)),
                reminder_time=str(
                    notifications.get("reminderTime", defaults.notifications.reminder_time)
                ),
                sound_enabled=bool(
                    notifications.get("soundEnabled", defaults.notifications.sound_enabled)
                ),
            ),
            theme=str(data.get("theme", defaults.theme)),
            week_starts_on=int(data.get("weekStartsOn", defaults.week_starts_on)),
            units={**defaults.units, **(data.get("units") or {})},
        )


__all__ = [
    "AppSettings",
    "MemorableMoment",
    "NotificationSettings",
    "SleepEntry",
    "UserProfile",
    "WeightEntry",
]
