"""
Eventhub API - Main Application Entry Point

Users sign up and log in for a signed token; authenticated users
create, update and delete their own events and register for any event.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventhub.api.errors import register_exception_handlers
from eventhub.api.middleware import RequestLoggingMiddleware
from eventhub.api.router import api_router
from eventhub.core.config import Settings, get_settings
from eventhub.core.logging import get_logger, setup_logging
from eventhub.core.metrics import metrics_endpoint
from eventhub.core.security import CredentialHasher, TokenService
from eventhub.db.session import Database


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(settings)
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    if settings.AUTO_CREATE_TABLES:
        await database.create_all()

    yield

    await database.dispose()
    logger.info("application_shutdown")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Event management API with token authentication and owner-only mutations",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.database = Database.from_settings(settings)
    app.state.token_service = TokenService.from_settings(settings)
    app.state.hasher = CredentialHasher.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Restrict in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for Docker and load balancers."""
        database_ok = await app.state.database.ping()
        return {
            "status": "healthy" if database_ok else "degraded",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "database": database_ok,
        }

    @app.get("/metrics", tags=["Health"], include_in_schema=False)
    async def metrics():
        return metrics_endpoint()

    return app


app = create_app()
