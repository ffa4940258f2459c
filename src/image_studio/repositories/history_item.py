"""HistoryItem repository.

Provides the two data access operations the history store supports:
batched append and newest-first listing per collection.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from image_studio.models.history_item import HistoryItem

HISTORY_LIMIT = 200


class HistoryItemRepository:
    """Repository for HistoryItem entities.

    Methods:
    - add_many: Persist a batch of items in one flush
    - list_by_collection: Most recent items of a collection
    """

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self.session = session

    async def add_many(self, items: list[HistoryItem]) -> list[HistoryItem]:
        """Persist a batch of history items.

        All items are flushed together and committed by the surrounding
        UnitOfWork, so the batch is stored atomically.

        Args:
            items: HistoryItem entities to persist

        Returns:
            The persisted items
        """
        self.session.add_all(items)
        await self.session.flush()
        return items

    async def list_by_collection(
        self, collection_id: str, limit: int = HISTORY_LIMIT
    ) -> list[HistoryItem]:
        """Retrieve the most recent items of a collection.

        Args:
            collection_id: Collection identifier from the page URL
            limit: Maximum number of items to return (default: 200)

        Returns:
            List of items ordered by creation time (newest first). Items sharing
            a timestamp, such as one generation batch, keep their insertion order.
        """
        result = await self.session.execute(
            select(HistoryItem)
            .where(HistoryItem.collection_id == collection_id)  # type: ignore[arg-type]
            .order_by(
                HistoryItem.created_at.desc(),  # type: ignore[attr-defined]
                HistoryItem.id.asc(),  # type: ignore[attr-defined]
            )
            .limit(limit)
        )
        return list(result.scalars().all())
