"""
Database Engine and Sessions.

The engine is built from database.yaml the first time something asks for
it, so importing the app (or running `cli.py --service config`) never
opens a connection.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from modules.backend.core.logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options() -> dict[str, Any]:
    """echo and timeouts.database always; pool sizing only for server databases."""
    from modules.backend.core.config import get_app_config

    config = get_app_config()
    db = config.database
    timeout = config.application.timeouts.database
    options: dict[str, Any] = {"echo": db.echo}
    if db.driver.startswith("sqlite"):
        # sqlite3 busy timeout
        return options | {"connect_args": {"timeout": timeout}}
    return options | {
        "connect_args": {"command_timeout": timeout},
        "pool_size": db.pool_size,
        "max_overflow": db.max_overflow,
        "pool_timeout": db.pool_timeout,
        "pool_recycle": db.pool_recycle,
    }


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        from modules.backend.core.config import get_database_url

        _engine = create_async_engine(get_database_url(), **_engine_options())
        logger.debug("Database engine created", extra={"dialect": _engine.dialect.name})
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(), class_=AsyncSession, expire_on_commit=False
        )
    return _session_factory


async def create_tables() -> None:
    """CREATE TABLE IF NOT EXISTS for every model (only the clientes table today)."""
    import modules.backend.models.cliente  # noqa: F401
    from modules.backend.models.base import Base

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def dispose_engine() -> None:
    global _engine, _session_factory
    engine, _engine, _session_factory = _engine, None, None
    if engine is not None:
        await engine.dispose()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: one session per request.

    Commits after the endpoint returns; rolls back and re-raises if it
    raised.
    """
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        else:
            await session.commit()
