"""
Clientes API application.

Run with: `uvicorn modules.backend.main:app` or `python cli.py --service server`.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modules.backend.api import clientes, health
from modules.backend.core.config import get_app_config
from modules.backend.core.database import create_tables, dispose_engine
from modules.backend.core.exception_handlers import register_exception_handlers
from modules.backend.core.logging import get_logger, setup_logging
from modules.backend.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Logging and schema on the way up, pooled connections closed on the way down."""
    config = get_app_config()
    setup_logging()

    if config.database.create_tables:
        await create_tables()

    logger.info(
        "Clientes API started",
        extra={
            "environment": config.application.environment,
            "database_driver": config.database.driver,
        },
    )
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Clientes API stopped")


def _add_cors(app: FastAPI, origins: list[str]) -> None:
    # Browsers reject credentials together with a wildcard origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app() -> FastAPI:
    """Build the application from application.yaml."""
    settings = get_app_config().application

    app = FastAPI(
        title=settings.name,
        description=settings.description,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    if settings.cors.origins:
        _add_cors(app, settings.cors.origins)

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(clientes.router, tags=["clientes"])
    return app


def get_app() -> FastAPI:
    """Module-level singleton; built on first use, not at import."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    # `uvicorn modules.backend.main:app` resolves the attribute lazily
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
