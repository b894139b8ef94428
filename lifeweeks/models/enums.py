"""Enumeration types shared by the models and the timeline engine.

Every lookup table keyed by one of these enums lists all members, so a
missing entry is a ``KeyError`` in tests rather than a silent fallback.
"""

from enum import Enum


class EventCategory(str, Enum):
    """Category of a user-owned life event."""

    PERSONAL = "personal"
    CAREER = "career"
    EDUCATION = "education"
    TRAVEL = "travel"
    HEALTH = "health"
    FAMILY = "family"
    ACHIEVEMENT = "achievement"
    OTHER = "other"

    @classmethod
    def choices(cls) -> list[str]:
        return [category.value for category in cls]

    @property
    def label(self) -> str:
        return EVENT_CATEGORY_LABELS[self]

    @property
    def color(self) -> str:
        """Default display color for events in this category."""
        return EVENT_CATEGORY_COLORS[self]


class CatalogCategory(str, Enum):
    """Category of a historical catalog entry."""

    WORLD = "world"
    TECHNOLOGY = "technology"
    CULTURE = "culture"
    SCIENCE = "science"
    SPORTS = "sports"
    DISASTER = "disaster"
    POLITICS = "politics"
    PERSONAL = "personal"

    @classmethod
    def choices(cls) -> list[str]:
        return [category.value for category in cls]


class Significance(str, Enum):
    """How significant a historical catalog entry is."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def choices(cls) -> list[str]:
        return [level.value for level in cls]

    @property
    def label(self) -> str:
        return SIGNIFICANCE_LABELS[self]


EVENT_CATEGORY_LABELS: dict[EventCategory, str] = {
    EventCategory.PERSONAL: "Personal",
    EventCategory.CAREER: "Career",
    EventCategory.EDUCATION: "Education",
    EventCategory.TRAVEL: "Travel",
    EventCategory.HEALTH: "Health",
    EventCategory.FAMILY: "Family",
    EventCategory.ACHIEVEMENT: "Achievement",
    EventCategory.OTHER: "Other",
}

EVENT_CATEGORY_COLORS: dict[EventCategory, str] = {
    EventCategory.PERSONAL: "#3B82F6",
    EventCategory.CAREER: "#8B5CF6",
    EventCategory.EDUCATION: "#10B981",
    EventCategory.TRAVEL: "#F59E0B",
    EventCategory.HEALTH: "#EF4444",
    EventCategory.FAMILY: "#F97316",
    EventCategory.ACHIEVEMENT: "#06B6D4",
    EventCategory.OTHER: "#8B5A2B",
}

SIGNIFICANCE_LABELS: dict[Significance, str] = {
    Significance.LOW: "Minor",
    Significance.MEDIUM: "Notable",
    Significance.HIGH: "Major",
    Significance.CRITICAL: "Historic",
}
