"""Service module exports."""

from . import dates, schedule, stats, streaks, templates, tracker

__all__ = [
    "dates",
    "schedule",
    "stats",
    "streaks",
    "templates",
    "tracker",
]
