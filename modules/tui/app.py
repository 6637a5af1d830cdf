"""
Clientes TUI.

Single-screen terminal client: a table of clients, a modal form for
create/edit and a modal confirmation for delete. All behaviour lives in
ClientesController; this module only renders state and forwards actions.

Usage:
    python tui.py
    python cli.py --service tui
"""

from __future__ import annotations

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Static

from modules.tui.cancellation import policies_from_config
from modules.tui.client import ClientesAPI
from modules.tui.controller import ClientesController
from modules.tui.models import Cliente, FormData
from modules.tui.state import Notice, ScreenState


class ClienteFormScreen(ModalScreen[None]):
    """Create/edit form. Stays open until the controller closes the form."""

    BINDINGS = [Binding("escape", "cancel", "Cancelar")]

    def __init__(self, controller: ClientesController) -> None:
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        state = self.controller.state
        title = "Editar Cliente" if state.editing else "Novo Cliente"
        with Vertical(id="dialog"):
            yield Label(title, id="dialog-title")
            yield Label("Nome:")
            yield Input(value=state.form.nome, placeholder="Nome completo", id="nome")
            yield Label("Idade:")
            yield Input(value=state.form.idade, placeholder="Idade", id="idade")
            yield Label("UF:")
            yield Input(value=state.form.uf, placeholder="SP", max_length=2, id="uf")
            with Horizontal(classes="buttons"):
                yield Button("Salvar", variant="primary", id="save")
                yield Button("Cancelar", id="cancel")

    def _read_form(self) -> FormData:
        return FormData(
            nome=self.query_one("#nome", Input).value,
            idade=self.query_one("#idade", Input).value,
            uf=self.query_one("#uf", Input).value,
        )

    @on(Button.Pressed, "#save")
    @on(Input.Submitted)
    def save(self) -> None:
        self.controller.set_form(self._read_form())
        self._submit()

    @work(exclusive=True, group="form")
    async def _submit(self) -> None:
        await self.controller.submit()
        if not self.controller.state.form_visible:
            self.dismiss(None)

    @on(Button.Pressed, "#cancel")
    def action_cancel(self) -> None:
        self.controller.close_form()
        self.dismiss(None)


class ConfirmDeleteScreen(ModalScreen[None]):
    """Second step of the delete flow, naming the target record."""

    BINDINGS = [Binding("escape", "cancel", "Cancelar")]

    def __init__(self, controller: ClientesController) -> None:
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        target = self.controller.state.deleting
        nome = target.nome if target else ""
        with Vertical(id="dialog"):
            yield Label("Confirmar exclusão", id="dialog-title")
            yield Static(f'Tem certeza que deseja deletar o cliente "{nome}"?')
            with Horizontal(classes="buttons"):
                yield Button("Deletar", variant="error", id="confirm")
                yield Button("Cancelar", id="cancel")

    @on(Button.Pressed, "#confirm")
    def confirm(self) -> None:
        self.query_one("#confirm", Button).disabled = True
        self._delete()

    @work(exclusive=True, group="delete")
    async def _delete(self) -> None:
        await self.controller.confirm_delete()
        self.dismiss(None)

    @on(Button.Pressed, "#cancel")
    def action_cancel(self) -> None:
        self.controller.cancel_delete()
        self.dismiss(None)


class ClientesApp(App):
    """Terminal front-end for the Clientes API."""

    TITLE = "Clientes"

    CSS = """
    DataTable {
        height: 1fr;
    }

    #status {
        dock: bottom;
        height: 1;
        padding: 0 1;
        background: $surface;
    }

    ModalScreen {
        align: center middle;
    }

    #dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: thick $primary;
        background: $panel;
    }

    #dialog-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .buttons {
        height: auto;
        margin-top: 1;
        align-horizontal: right;
    }
    """

    BINDINGS = [
        Binding("n", "new", "Novo"),
        Binding("e", "edit", "Editar"),
        Binding("d", "delete", "Deletar"),
        Binding("r", "reload", "Recarregar"),
        Binding("q", "quit", "Sair"),
    ]

    def __init__(self, api: ClientesAPI | None = None) -> None:
        super().__init__()
        self.api = api or ClientesAPI()
        read_policy, delete_policy = policies_from_config()
        self.controller = ClientesController(
            self.api,
            notify=self._show_notice,
            on_change=self._render_state,
            read_policy=read_policy,
            delete_policy=delete_policy,
        )
        self._rendered: tuple[Cliente, ...] | None = None
        self._table: DataTable | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="clientes", cursor_type="row", zebra_stripes=True)
        yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        self._table = self.query_one("#clientes", DataTable)
        self._status = self.query_one("#status", Static)
        self._table.add_columns("ID", "Nome", "Idade", "UF")
        self.action_reload()

    async def action_quit(self) -> None:
        await self.api.close()
        self.exit()

    def _show_notice(self, notice: Notice) -> None:
        self.notify(notice.message, title=notice.title, severity=notice.severity)

    def _render_state(self, state: ScreenState) -> None:
        # Widgets are held directly: a modal may be on top when this runs
        table, status_bar = self._table, self._status
        if table is None or status_bar is None:
            return
        if self._rendered is not state.clientes:
            table.clear()
            for cliente in state.clientes:
                table.add_row(
                    str(cliente.id), cliente.nome, f"{cliente.idade} anos", cliente.uf,
                    key=str(cliente.id),
                )
            self._rendered = state.clientes

        status = "Carregando..." if state.loading else f"{len(state.clientes)} cliente(s)"
        status_bar.update(status)

    def _selected(self) -> Cliente | None:
        clientes = self.controller.state.clientes
        if not clientes:
            return None
        row = self._table.cursor_row if self._table else -1
        if 0 <= row < len(clientes):
            return clientes[row]
        return None

    @work(exclusive=True, group="reload")
    async def action_reload(self) -> None:
        await self.controller.refresh()

    def action_new(self) -> None:
        self.controller.open_create()
        self.push_screen(ClienteFormScreen(self.controller))

    def action_edit(self) -> None:
        cliente = self._selected()
        if cliente is None:
            return
        self.controller.open_edit(cliente)
        self.push_screen(ClienteFormScreen(self.controller))

    def action_delete(self) -> None:
        cliente = self._selected()
        if cliente is None:
            return
        self.controller.request_delete(cliente)
        self.push_screen(ConfirmDeleteScreen(self.controller))


def main() -> None:
    ClientesApp().run()
