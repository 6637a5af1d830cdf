"""
Base Service.

Services sit between the routers and the repositories. They own the
business rules and are the only place where storage exceptions become
application errors.

Usage:
    class ClienteService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = ClienteRepository(session)
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.exceptions import DatabaseError
from modules.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """Session holder with a module-named logger and storage error mapping."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(type(self).__module__)

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
        error_message: str,
    ) -> T:
        """
        Await `coro`, turning any SQLAlchemyError into DatabaseError.

        The driver's text is logged here and never reaches the response;
        the client only sees `error_message`.

        Raises:
            DatabaseError: If the database operation fails
        """
        try:
            return await coro
        except SQLAlchemyError as e:
            self._logger.error(
                "Database operation failed",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(error_message) from e

    async def _committed(self, coro: Awaitable[T]) -> T:
        """
        Await a write and commit it.

        Pass the result to _execute_db_operation so a failed commit becomes
        the operation's DatabaseError before any response is produced.
        """
        try:
            result = await coro
            await self._session.commit()
        except SQLAlchemyError:
            await self._session.rollback()
            raise
        return result

    def _context(self, **fields: Any) -> dict[str, Any]:
        return {"service": type(self).__name__, **fields}

    def _log_operation(self, operation: str, **context: Any) -> None:
        self._logger.info(operation, extra=self._context(**context))

    def _log_debug(self, message: str, **context: Any) -> None:
        self._logger.debug(message, extra=self._context(**context))
