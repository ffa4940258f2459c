"""FastAPI application factory."""

from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from sqlalchemy import text

from image_studio.api.errors import register_error_handlers
from image_studio.api.routes import generate, history, options
from image_studio.core.config import Settings, configure_logging
from image_studio.core.database import create_db_engine, create_schema, setup_db_session
from image_studio.services.image_generation.replicate_client import ReplicateImageClient
from image_studio.services.mirror.pinata_client import PinataClient
from image_studio.uow import create_uow_factory

logger = structlog.get_logger()

TEMPLATE_PATH = Path(__file__).resolve().parent / "templates" / "index.html"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Handles startup and shutdown tasks:
    - Startup: Configure logging, build provider/mirror clients, connect the history store
    - Shutdown: Dispose database engine

    The history store is optional: without DATABASE_URL, app.state.uow_factory is None
    and the history endpoints degrade instead of failing.
    """
    settings = Settings()  # type: ignore[call-arg]

    configure_logging(settings)

    app.state.image_client = ReplicateImageClient(api_token=settings.replicate_api_token)
    app.state.mirror = (
        PinataClient(jwt_token=settings.pinata_jwt, gateway_domain=settings.pinata_gateway)
        if settings.mirroring_enabled
        else None
    )

    engine = None
    if settings.database_configured:
        engine = create_db_engine(
            settings.database_url,
            auth_token=settings.database_auth_token,
            pool_size=settings.db_pool_size,
        )
        session_factory = setup_db_session(engine)
        app.state.session_factory = session_factory
        app.state.uow_factory = create_uow_factory(
            session_factory, schema_initializer=lambda: create_schema(engine)
        )
    else:
        app.state.session_factory = None
        app.state.uow_factory = None
        logger.warning("startup.history_store_disabled", reason="DATABASE_URL not set")

    logger.info(
        "application.startup",
        db_url=settings.database_url.split("@")[-1] if engine is not None else None,
        mirroring=settings.mirroring_enabled,
    )

    yield

    logger.info("application.shutdown")
    if engine is not None:
        await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = Settings()  # type: ignore[call-arg]

    app = FastAPI(
        title="Image Studio API",
        description="Text-to-image generation with shared collection history",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(generate.router)
    app.include_router(history.router)
    app.include_router(options.router)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Serve the request composer page."""
        return HTMLResponse(TEMPLATE_PATH.read_text(encoding="utf-8"))

    @app.get("/health")
    async def health_check(response: Response):
        """Health check endpoint with database validation.

        Returns:
            200: {"status": "healthy", "database": "configured" | "disabled"}
            503: {"status": "unhealthy", "error": {...}} if database connection fails
        """
        session_factory = getattr(app.state, "session_factory", None)
        if session_factory is None:
            return {"status": "healthy", "database": "disabled"}

        try:
            async with session_factory() as session:
                result = await session.execute(text("SELECT 1"))
                result.scalar()

            logger.debug("health_check.success")
            return {"status": "healthy", "database": "configured"}

        except Exception as e:
            logger.error(
                "health_check.failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            return {
                "status": "unhealthy",
                "error": {
                    "type": type(e).__name__,
                    "message": str(e),
                },
            }

    return app


# Create app instance for uvicorn
app = create_app()
