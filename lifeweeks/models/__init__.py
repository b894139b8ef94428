from lifeweeks.models.attachment import Attachment
from lifeweeks.models.enums import CatalogCategory, EventCategory, Significance
from lifeweeks.models.event import Event
from lifeweeks.models.profile import UserProfile

__all__ = [
    "Attachment",
    "CatalogCategory",
    "Event",
    "EventCategory",
    "Significance",
    "UserProfile",
]
