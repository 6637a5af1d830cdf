"""
Cliente Service.

Business logic for client records: list, fetch, create, replace, delete.
Each public method maps storage failures to the fixed message of its
endpoint. Mutations commit before returning.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.exceptions import NotFoundError
from modules.backend.models.cliente import Cliente
from modules.backend.repositories.cliente import ClienteRepository
from modules.backend.schemas.cliente import ClienteIn
from modules.backend.services.base import BaseService

MSG_LIST_FAILED = "Erro ao buscar clientes"
MSG_GET_FAILED = "Erro ao buscar cliente"
MSG_CREATE_FAILED = "Erro ao criar cliente"
MSG_UPDATE_FAILED = "Erro ao atualizar cliente"
MSG_DELETE_FAILED = "Erro ao deletar cliente"
MSG_NOT_FOUND = "Cliente não encontrado"


class ClienteService(BaseService):
    """Service for client records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = ClienteRepository(session)

    async def list_clientes(self) -> list[Cliente]:
        """Return every client ordered by ID."""
        clientes = await self._execute_db_operation(
            "list_clientes", self.repo.get_all(), MSG_LIST_FAILED,
        )
        self._log_debug("Clientes listed", total=len(clientes))
        return clientes

    async def get_cliente(self, cliente_id: int) -> Cliente:
        """
        Get a client by ID.

        Raises:
            NotFoundError: If no client has this ID
        """
        cliente = await self._execute_db_operation(
            "get_cliente", self.repo.get_by_id_or_none(cliente_id), MSG_GET_FAILED,
        )
        if cliente is None:
            raise NotFoundError(MSG_NOT_FOUND)
        return cliente

    async def create_cliente(self, data: ClienteIn) -> int:
        """Create a client and return its new ID."""
        self._log_operation("Creating cliente", uf=data.uf)

        cliente_id = await self._execute_db_operation(
            "create_cliente",
            self._committed(self.repo.insert_cliente(data.nome, data.idade, data.uf)),
            MSG_CREATE_FAILED,
        )

        self._log_debug("Cliente created", cliente_id=cliente_id)
        return cliente_id

    async def update_cliente(self, cliente_id: int, data: ClienteIn) -> None:
        """
        Replace name, age and state code of an existing client.

        Raises:
            NotFoundError: If no client has this ID
        """
        self._log_operation("Updating cliente", cliente_id=cliente_id)

        updated = await self._execute_db_operation(
            "update_cliente",
            self._committed(self.repo.update_cliente(cliente_id, data.nome, data.idade, data.uf)),
            MSG_UPDATE_FAILED,
        )
        if not updated:
            raise NotFoundError(MSG_NOT_FOUND)

    async def delete_cliente(self, cliente_id: int) -> None:
        """
        Delete a client.

        Raises:
            NotFoundError: If no client has this ID
        """
        self._log_operation("Deleting cliente", cliente_id=cliente_id)

        deleted = await self._execute_db_operation(
            "delete_cliente",
            self._committed(self.repo.delete_by_id(cliente_id)),
            MSG_DELETE_FAILED,
        )
        if not deleted:
            raise NotFoundError(MSG_NOT_FOUND)
