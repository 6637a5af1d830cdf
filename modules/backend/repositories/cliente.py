"""
Cliente Repository.

Data access layer for client records.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.models.cliente import Cliente
from modules.backend.repositories.base import BaseRepository


class ClienteRepository(BaseRepository[Cliente]):
    """Repository for the clientes table."""

    model = Cliente

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def insert_cliente(self, nome: str, idade: int, uf: str) -> int:
        """Insert a client and return the ID assigned by the database."""
        return await self.create(nome=nome, idade=idade, uf=uf)

    async def update_cliente(self, id: int, nome: str, idade: int, uf: str) -> bool:
        """Replace all editable fields of a client."""
        return await self.update_by_id(id, nome=nome, idade=idade, uf=uf)
