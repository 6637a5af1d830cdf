"""
Screen State.

The whole screen is described by one frozen ScreenState. Transitions return
a new object; the client list is only ever replaced wholesale.
"""

from dataclasses import dataclass, replace
from typing import Literal

from modules.tui.models import Cliente, FormData

Severity = Literal["information", "warning", "error"]


@dataclass(frozen=True)
class Notice:
    """Message for the user (rendered as a toast by the app)."""

    title: str
    message: str
    severity: Severity = "information"


@dataclass(frozen=True)
class ScreenState:
    clientes: tuple[Cliente, ...] = ()
    loading: bool = False
    form_visible: bool = False
    editing: Cliente | None = None
    form: FormData = FormData()
    delete_visible: bool = False
    deleting: Cliente | None = None

    def with_clientes(self, clientes: list[Cliente]) -> "ScreenState":
        return replace(self, clientes=tuple(clientes))

    def open_create(self) -> "ScreenState":
        return replace(self, form_visible=True, editing=None, form=FormData())

    def open_edit(self, cliente: Cliente) -> "ScreenState":
        return replace(
            self,
            form_visible=True,
            editing=cliente,
            form=FormData.from_cliente(cliente),
        )

    def close_form(self) -> "ScreenState":
        return replace(self, form_visible=False, editing=None, form=FormData())

    def open_delete(self, cliente: Cliente) -> "ScreenState":
        return replace(self, delete_visible=True, deleting=cliente)

    def close_delete(self) -> "ScreenState":
        return replace(self, delete_visible=False, deleting=None)
