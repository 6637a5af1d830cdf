"""
Integration Tests for the terminal client flow.

ClientesController drives ClientesAPI, which talks to the real FastAPI app
in-process through httpx.ASGITransport.
"""

import pytest

from modules.tui.cancellation import READ_POLICY
from modules.tui.controller import ClientesController
from modules.tui.models import FormData
from modules.tui.state import Notice


@pytest.fixture
def notices() -> list[Notice]:
    return []


@pytest.fixture
def controller(clientes_api, notices) -> ClientesController:
    return ClientesController(clientes_api, notify=notices.append)


class TestClientesFlow:
    """End-to-end screen behaviour against the API."""

    @pytest.mark.asyncio
    async def test_empty_list(self, controller, notices):
        assert await controller.refresh() is True

        assert controller.state.clientes == ()
        assert notices == []

    @pytest.mark.asyncio
    async def test_create_edit_delete(self, controller, notices):
        controller.open_create()
        controller.set_form(FormData(nome="Ana Silva", idade="30", uf="sp"))
        assert await controller.submit() is True

        [ana] = controller.state.clientes
        assert (ana.nome, ana.idade, ana.uf) == ("Ana Silva", 30, "SP")

        controller.open_edit(ana)
        controller.set_form(FormData(nome="Ana Souza", idade="31", uf="RJ"))
        assert await controller.submit() is True

        [edited] = controller.state.clientes
        assert edited.id == ana.id
        assert (edited.nome, edited.idade, edited.uf) == ("Ana Souza", 31, "RJ")

        controller.request_delete(edited)
        assert await controller.confirm_delete() is True

        assert controller.state.clientes == ()
        assert [n.message for n in notices] == [
            "Cliente criado com sucesso!",
            "Cliente atualizado com sucesso!",
            "Cliente deletado com sucesso!",
        ]

    @pytest.mark.asyncio
    async def test_deleting_a_vanished_record(self, controller, clientes_api, notices):
        """Should report the failure and still close the confirmation."""
        controller.open_create()
        controller.set_form(FormData(nome="Bruno", idade="45", uf="RJ"))
        await controller.submit()
        [bruno] = controller.state.clientes

        await clientes_api.delete_cliente(bruno.id, READ_POLICY.new_token())

        controller.request_delete(bruno)
        assert await controller.confirm_delete() is False

        assert notices[-1] == Notice("Erro", "Não foi possível deletar o cliente", "error")
        assert not controller.state.delete_visible

    @pytest.mark.asyncio
    async def test_editing_a_vanished_record_keeps_form(self, controller, clientes_api, notices):
        controller.open_create()
        controller.set_form(FormData(nome="Carla", idade="22", uf="MG"))
        await controller.submit()
        [carla] = controller.state.clientes

        await clientes_api.delete_cliente(carla.id, READ_POLICY.new_token())

        controller.open_edit(carla)
        assert await controller.submit() is False

        assert notices[-1] == Notice("Erro", "Não foi possível atualizar o cliente", "error")
        assert controller.state.form_visible
