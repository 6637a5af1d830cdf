"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.database import get_db_session
from modules.backend.services.cliente import ClienteService

# Closed before the response is sent
DbSession = Annotated[AsyncSession, Depends(get_db_session, scope="function")]


def get_cliente_service(db: DbSession) -> ClienteService:
    """Build a ClienteService bound to the request's session."""
    return ClienteService(db)


ClienteServiceDep = Annotated[ClienteService, Depends(get_cliente_service)]
