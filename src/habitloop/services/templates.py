"""Suggested habit configurations used to pre-fill habit creation."""

from __future__ import annotations

from dataclasses import dataclass

from ..models.habit import TrackingType

HABIT_CATEGORIES = (
    "Health",
    "Fitness",
    "Wellness",
    "Learning",
    "Productivity",
    "Social",
    "Self-Care",
)

TRACKING_TYPE_DESCRIPTIONS = {
    TrackingType.COMPLETION: "Mark as complete when done",
    TrackingType.DURATION: "Track time spent on activity",
    TrackingType.QUANTITY: "Track amount or distance",
    TrackingType.INCREMENT: "Count repetitions or occurrences",
}


@dataclass(frozen=True, slots=True)
class HabitTemplate:
    name: str
    icon: str
    target: float
    unit: str
    tracking_type: TrackingType
    description: str
    category: str
    is_target_flexible: bool = False
    quick_values: tuple[float, ...] = ()


HABIT_TEMPLATES: tuple[HabitTemplate, ...] = (
    # Health & Fitness
    HabitTemplate("Drink Water", "water", 2000, "ml", TrackingType.QUANTITY,
                  "Stay hydrated throughout the day", "Health",
                  quick_values=(250, 500, 750, 1000)),
    HabitTemplate("Yoga", "body", 30, "min", TrackingType.DURATION,
                  "Practice yoga for flexibility and mindfulness", "Fitness",
                  is_target_flexible=True, quick_values=(15, 30, 45, 60)),
    HabitTemplate("Running", "walk", 3, "km", TrackingType.QUANTITY,
                  "Go for a run to improve cardiovascular health", "Fitness",
                  is_target_flexible=True, quick_values=(1, 3, 5, 10)),
    HabitTemplate("Meditation", "leaf", 10, "min", TrackingType.DURATION,
                  "Practice mindfulness and reduce stress", "Wellness",
                  is_target_flexible=True, quick_values=(5, 10, 15, 20)),
    HabitTemplate("Workout", "fitness", 1, "session", TrackingType.COMPLETION,
                  "Complete a workout session", "Fitness"),
    HabitTemplate("Walk", "walk", 10000, "steps", TrackingType.QUANTITY,
                  "Take steps for better health", "Fitness",
                  is_target_flexible=True, quick_values=(2500, 5000, 7500, 10000)),
    # Learning & Growth
    HabitTemplate("Read", "book", 30, "min", TrackingType.DURATION,
                  "Read books or articles to expand knowledge", "Learning",
                  is_target_flexible=True, quick_values=(15, 30, 45, 60)),
    HabitTemplate("Study", "school", 60, "min", TrackingType.DURATION,
                  "Dedicated study time for learning", "Learning",
                  is_target_flexible=True, quick_values=(30, 60, 90, 120)),
    HabitTemplate("Practice Instrument", "musical-notes", 30, "min", TrackingType.DURATION,
                  "Practice playing a musical instrument", "Learning",
                  is_target_flexible=True, quick_values=(15, 30, 45, 60)),
    # Productivity
    HabitTemplate("Journal", "create", 1, "entry", TrackingType.COMPLETION,
                  "Write in your journal for reflection", "Productivity"),
    HabitTemplate("Plan Tomorrow", "calendar", 1, "session", TrackingType.COMPLETION,
                  "Plan your tasks for the next day", "Productivity"),
    HabitTemplate("Deep Work", "time", 120, "min", TrackingType.DURATION,
                  "Focused work without distractions", "Productivity",
                  is_target_flexible=True, quick_values=(60, 90, 120, 180)),
    # Social & Relationships
    HabitTemplate("Call Family", "call", 1, "call", TrackingType.COMPLETION,
                  "Stay connected with family members", "Social"),
    HabitTemplate("Social Time", "people", 60, "min", TrackingType.DURATION,
                  "Spend quality time with friends or family", "Social",
                  is_target_flexible=True, quick_values=(30, 60, 90, 120)),
    # Self-Care
    HabitTemplate("Skincare", "happy", 1, "routine", TrackingType.COMPLETION,
                  "Complete your skincare routine", "Self-Care"),
    HabitTemplate("Take Vitamins", "medical", 1, "dose", TrackingType.COMPLETION,
                  "Take your daily vitamins", "Health"),
    HabitTemplate("Stretch", "body", 10, "min", TrackingType.DURATION,
                  "Stretch to improve flexibility", "Wellness",
                  is_target_flexible=True, quick_values=(5, 10, 15, 20)),
    # Counted habits
    HabitTemplate("Pushups", "fitness", 20, "reps", TrackingType.INCREMENT,
                  "Do pushups for upper body strength", "Fitness",
                  is_target_flexible=True),
    HabitTemplate("Gratitude", "heart", 3, "items", TrackingType.INCREMENT,
                  "Write down things you're grateful for", "Wellness"),
)


def template_categories() -> tuple[str, ...]:
    return HABIT_CATEGORIES


def templates_by_category(category: str) -> list[HabitTemplate]:
    return [template for template in HABIT_TEMPLATES if template.category == category]


def find_template(name: str) -> HabitTemplate | None:
    """Case-insensitive lookup by template name."""
    wanted = name.strip().lower()
    for template in HABIT_TEMPLATES:
        if template.name.lower() == wanted:
            return template
    return None


def tracking_type_description(tracking_type: TrackingType) -> str:
    return TRACKING_TYPE_DESCRIPTIONS.get(tracking_type, "Track your progress")


__all__ = [
    "HABIT_CATEGORIES",
    "HABIT_TEMPLATES",
    "HabitTemplate",
    "find_template",
    "template_categories",
    "templates_by_category",
    "tracking_type_description",
]
