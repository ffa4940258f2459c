"""pytest fixtures for Image Studio tests.

Provides:
- engine: Function-scoped SQLite (aiosqlite) engine in a temporary directory
- session: Function-scoped database session with the schema created
- uow_factory: Function-scoped UnitOfWork factory with lazy schema creation
- image_client: Fake inference provider client recording its calls
- test_client: AsyncClient bound to the ASGI app with injected state
"""

import os

os.environ["APP_ENV"] = "test"

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession  # noqa: E402

from image_studio.core.database import create_db_engine, create_schema, setup_db_session  # noqa: E402
from image_studio.services.image_generation.replicate_client import (  # noqa: E402
    GenerationInput,
    GenerationOutput,
)
from image_studio.uow import create_uow_factory  # noqa: E402


class FakeImageClient:
    """Stand-in for ReplicateImageClient that records calls."""

    def __init__(self):
        self.calls: list[tuple[str, GenerationInput]] = []
        self.output = GenerationOutput(urls=["https://replicate.delivery/a.png"])
        self.error: Exception | None = None

    async def generate(self, route: str, params: GenerationInput) -> GenerationOutput:
        self.calls.append((route, params))
        if self.error is not None:
            raise self.error
        return self.output


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine on an empty SQLite file (no tables yet)."""
    db_engine = create_db_engine(f"sqlite+aiosqlite:///{tmp_path / 'history.db'}")
    yield db_engine
    await db_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session on a database with the history schema created."""
    await create_schema(engine)
    session_factory = setup_db_session(engine)
    async with session_factory() as db_session:
        yield db_session
        await db_session.rollback()


@pytest.fixture
def uow_factory(engine):
    """Provide UnitOfWork factory that creates the schema on first use."""
    return create_uow_factory(
        setup_db_session(engine), schema_initializer=lambda: create_schema(engine)
    )


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient()


@pytest_asyncio.fixture
async def test_client(uow_factory, image_client, engine):
    """Provide AsyncClient for testing API endpoints with database access."""
    from image_studio.app import app

    app.state.uow_factory = uow_factory
    app.state.session_factory = setup_db_session(engine)
    app.state.image_client = image_client
    app.state.mirror = None

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def unconfigured_client(image_client):
    """Provide AsyncClient for an app running without a history store."""
    from image_studio.app import app

    app.state.uow_factory = None
    app.state.session_factory = None
    app.state.image_client = image_client
    app.state.mirror = None

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
