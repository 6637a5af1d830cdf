"""
Clientes API Endpoints.

CRUD over client records. The list lives at the application root; single
records live under /clientes.
"""

from typing import Annotated

from fastapi import APIRouter, Path

from modules.backend.core.dependencies import ClienteServiceDep
from modules.backend.schemas.base import ErrorResponse, MessageResponse
from modules.backend.schemas.cliente import ClienteIn, ClienteOut

router = APIRouter()

# Positive and within a signed 64-bit INTEGER column
ClienteId = Annotated[int, Path(ge=1, le=2**63 - 1)]

_ERRORS = {500: {"model": ErrorResponse}}
_ERRORS_WITH_404 = {404: {"model": ErrorResponse}, **_ERRORS}


@router.get(
    "/",
    response_model=list[ClienteOut],
    responses=_ERRORS,
    summary="List clients",
)
async def list_clientes(service: ClienteServiceDep) -> list[ClienteOut]:
    """Return every client record."""
    clientes = await service.list_clientes()
    return [ClienteOut.model_validate(cliente) for cliente in clientes]


@router.get(
    "/clientes/{cliente_id}",
    response_model=ClienteOut,
    responses=_ERRORS_WITH_404,
    summary="Get a client",
)
async def get_cliente(cliente_id: ClienteId, service: ClienteServiceDep) -> ClienteOut:
    """Return one client record, 404 when it does not exist."""
    cliente = await service.get_cliente(cliente_id)
    return ClienteOut.model_validate(cliente)


@router.post(
    "/clientes",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    status_code=201,
    responses=_ERRORS,
    summary="Create a client",
)
async def create_cliente(data: ClienteIn, service: ClienteServiceDep) -> MessageResponse:
    """Create a client; the database assigns the ID."""
    cliente_id = await service.create_cliente(data)
    return MessageResponse(message="Cliente criado com sucesso", id=cliente_id)


@router.put(
    "/clientes/{cliente_id}",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    responses=_ERRORS_WITH_404,
    summary="Update a client",
)
async def update_cliente(
    cliente_id: ClienteId,
    data: ClienteIn,
    service: ClienteServiceDep,
) -> MessageResponse:
    """Replace Nome, Idade and UF of an existing client."""
    await service.update_cliente(cliente_id, data)
    return MessageResponse(message="Cliente atualizado com sucesso")


@router.delete(
    "/clientes/{cliente_id}",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    responses=_ERRORS_WITH_404,
    summary="Delete a client",
)
async def delete_cliente(cliente_id: ClienteId, service: ClienteServiceDep) -> MessageResponse:
    """Delete a client, 404 when nothing matched."""
    await service.delete_cliente(cliente_id)
    return MessageResponse(message="Cliente deletado com sucesso")
