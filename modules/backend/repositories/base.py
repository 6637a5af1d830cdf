"""
Base Repository.

Base class for repositories with common CRUD operations. Every statement is
built with SQLAlchemy Core constructs, so values always travel as bound
parameters.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class ClienteRepository(BaseRepository[Cliente]):
            model = Cliente
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_all(self) -> list[ModelType]:
        """Get every record ordered by primary key."""
        result = await self.session.execute(
            select(self.model)
            .order_by(self.model.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_by_id_or_none(self, id: int) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(self, **values: Any) -> int:
        """Insert a record and return its generated ID."""
        result = await self.session.execute(
            insert(self.model).values(**values).returning(self.model.id)
        )
        return result.scalar_one()

    async def update_by_id(self, id: int, **values: Any) -> bool:
        """Update a record in place. Returns False when no row matched."""
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def delete_by_id(self, id: int) -> bool:
        """Delete a record. Returns False when no row matched."""
        result = await self.session.execute(
            delete(self.model)
            .where(self.model.id == id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
