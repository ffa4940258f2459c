"""Repository layer for the history store."""

from image_studio.repositories.history_item import HistoryItemRepository

__all__ = [
    "HistoryItemRepository",
]
