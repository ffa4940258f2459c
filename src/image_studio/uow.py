"""Unit of Work pattern for the history store.

Provides transaction management with automatic commit/rollback and access to repositories.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from image_studio.repositories.history_item import HistoryItemRepository

logger = structlog.get_logger()


class UnitOfWork:
    """Unit of Work pattern implementation.

    Manages database transactions and provides access to repositories.
    Use as async context manager for automatic commit/rollback.

    Example:
        async with await uow_factory() as uow:
            await uow.history_items.add_many(items)
            # Automatically commits on successful exit
            # Automatically rolls back on exception
    """

    def __init__(self, session: AsyncSession):
        """Initialize UnitOfWork with database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self.session = session
        self.history_items = HistoryItemRepository(session)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager with automatic commit/rollback.

        Returns:
            False: Always re-raise exceptions after rollback
        """
        try:
            if exc_type is None:
                await self.session.commit()
                logger.debug("transaction.committed")
            else:
                await self.session.rollback()
                logger.info("transaction.rolled_back", exc_type=exc_type.__name__)
        finally:
            await self.session.close()

        return False


UnitOfWorkFactory = Callable[[], Awaitable[UnitOfWork]]


def create_uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
    schema_initializer: Optional[Callable[[], Awaitable[None]]] = None,
) -> UnitOfWorkFactory:
    """Create a factory function that produces UnitOfWork instances.

    When a schema initializer is given it runs once, before the first
    UnitOfWork is handed out, so the history table is created lazily on first use.

    Args:
        session_factory: SQLAlchemy async session factory
        schema_initializer: Optional coroutine function creating the schema

    Returns:
        Callable that creates UnitOfWork instances from new sessions

    Example:
        engine = create_db_engine(db_url)
        uow_factory = create_uow_factory(
            setup_db_session(engine), lambda: create_schema(engine)
        )

        async with await uow_factory() as uow:
            items = await uow.history_items.list_by_collection("abc123")
    """
    schema_ready = schema_initializer is None
    schema_lock = asyncio.Lock()

    async def _create_uow() -> UnitOfWork:
        nonlocal schema_ready
        if not schema_ready:
            async with schema_lock:
                if not schema_ready:
                    await schema_initializer()  # type: ignore[misc]
                    schema_ready = True
                    logger.info("history_store.schema_ready")

        return UnitOfWork(session_factory())

    return _create_uow
