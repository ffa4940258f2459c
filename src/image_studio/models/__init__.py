"""SQLModel database entities.

All models are imported here to ensure they're registered with SQLModel metadata
before the schema is created.
"""

from image_studio.models.history_item import HistoryItem

__all__ = [
    "HistoryItem",
]
