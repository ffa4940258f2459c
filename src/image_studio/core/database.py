"""Database engine, session factory and schema setup."""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel


def create_db_engine(db_url: str, auth_token: str = "", pool_size: int = 5) -> AsyncEngine:
    """Create async database engine for the history store.

    Args:
        db_url: SQLAlchemy async URL (postgresql+psycopg://..., sqlite+aiosqlite://...)
        auth_token: Optional credential used as the URL password when set
        pool_size: Maximum number of pooled connections (ignored for SQLite)

    Returns:
        Async engine, created once per process and shared by all requests
    """
    url = make_url(db_url)
    if auth_token:
        url = url.set(password=auth_token)

    engine_kwargs: dict = {
        "pool_pre_ping": True,  # Verify connections before using
        "echo": False,  # Don't log SQL queries (use structlog instead)
    }
    if url.get_backend_name() != "sqlite":
        engine_kwargs["pool_size"] = pool_size
        engine_kwargs["max_overflow"] = 0

    return create_async_engine(url, **engine_kwargs)


def setup_db_session(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async database session factory bound to the engine.

    Args:
        engine: Engine returned by create_db_engine

    Returns:
        Async session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Prevent lazy loading issues after commit
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create history tables and indexes if they don't exist yet."""
    # Registers table metadata
    import image_studio.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
