"""
Clientes Controller.

UI-independent behaviour of the clientes screen: fetching the list, the
create/edit form and the two-step delete. The Textual app forwards user
actions here and re-renders from `state` whenever `on_change` fires.
"""

from collections.abc import Callable
from dataclasses import replace

from modules.backend.core.logging import get_logger, log_with_source
from modules.tui.cancellation import DELETE_POLICY, READ_POLICY, CancellationPolicy
from modules.tui.client import (
    ClientAPIError,
    ClientesAPI,
    HttpStatusError,
    InvalidResponseError,
    RequestTimeoutError,
)
from modules.tui.models import Cliente, FormData
from modules.tui.state import Notice, ScreenState
from modules.tui.validation import FormValidationError, validate_form

logger = get_logger(__name__)

MSG_CONNECTION = "Erro de conexão. Verifique se a API está funcionando."


def _ignore_notice(notice: Notice) -> None:
    pass


def _ignore_change(state: ScreenState) -> None:
    pass


class ClientesController:
    """
    Owns the ScreenState and performs every API call of the screen.

    Args:
        api: ClientesAPI used for all requests
        notify: Called with each user-facing Notice
        on_change: Called with the new state after every transition
        read_policy: Policy for list, create and update requests
        delete_policy: Policy for delete requests
    """

    def __init__(
        self,
        api: ClientesAPI,
        notify: Callable[[Notice], None] = _ignore_notice,
        on_change: Callable[[ScreenState], None] = _ignore_change,
        read_policy: CancellationPolicy = READ_POLICY,
        delete_policy: CancellationPolicy = DELETE_POLICY,
    ) -> None:
        self.api = api
        self._notify = notify
        self._on_change = on_change
        self.read_policy = read_policy
        self.delete_policy = delete_policy
        self._state = ScreenState()

    @property
    def state(self) -> ScreenState:
        return self._state

    def _set_state(self, state: ScreenState) -> None:
        self._state = state
        self._on_change(state)

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    async def refresh(self) -> bool:
        """Fetch the full list and replace the one on screen."""
        self._set_state(replace(self._state, loading=True))
        try:
            clientes = await self.api.list_clientes(self.read_policy.new_token())
        except RequestTimeoutError:
            self._notify(Notice(
                "Erro",
                "Timeout: Verifique se a API está rodando e o endereço está correto.",
                "error",
            ))
            return False
        except HttpStatusError as e:
            self._notify(Notice("Erro", f"Falha na conexão: HTTP {e.status_code}", "error"))
            return False
        except InvalidResponseError as e:
            self._notify(Notice("Erro", f"Falha na conexão: {e}", "error"))
            return False
        except ClientAPIError:
            self._notify(Notice(
                "Erro de Conexão",
                f"Não foi possível conectar com a API em {self.api.base_url}.",
                "error",
            ))
            return False
        finally:
            self._set_state(replace(self._state, loading=False))

        log_with_source(logger, "tui", "debug", "Clientes loaded", total=len(clientes))
        self._set_state(self._state.with_clientes(clientes))
        return True

    # ------------------------------------------------------------------
    # Create / edit form
    # ------------------------------------------------------------------

    def open_create(self) -> None:
        self._set_state(self._state.open_create())

    def open_edit(self, cliente: Cliente) -> None:
        self._set_state(self._state.open_edit(cliente))

    def close_form(self) -> None:
        self._set_state(self._state.close_form())

    def set_form(self, form: FormData) -> None:
        self._set_state(replace(self._state, form=form))

    async def submit(self) -> bool:
        """
        Validate the form and send it as a create or an update.

        On success the form closes and the list is re-fetched. On any
        failure the form stays open with its contents.
        """
        try:
            payload = validate_form(self._state.form)
        except FormValidationError as e:
            self._notify(Notice("Erro", e.message, "warning"))
            return False

        editing = self._state.editing
        action = "atualizar" if editing else "criar"
        try:
            if editing is None:
                await self.api.create_cliente(payload, self.read_policy.new_token())
            else:
                await self.api.update_cliente(editing.id, payload, self.read_policy.new_token())
        except HttpStatusError:
            self._notify(Notice("Erro", f"Não foi possível {action} o cliente", "error"))
            return False
        except ClientAPIError:
            self._notify(Notice("Erro", MSG_CONNECTION, "error"))
            return False

        done = "atualizado" if editing else "criado"
        self._notify(Notice("Sucesso", f"Cliente {done} com sucesso!"))
        self.close_form()
        await self.refresh()
        return True

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def request_delete(self, cliente: Cliente) -> None:
        """First step: open the confirmation naming the target."""
        self._set_state(self._state.open_delete(cliente))

    def cancel_delete(self) -> None:
        self._set_state(self._state.close_delete())

    async def confirm_delete(self) -> bool:
        """Second step: delete, then always dismiss the confirmation."""
        target = self._state.deleting
        if target is None:
            return False

        try:
            await self.api.delete_cliente(target.id, self.delete_policy.new_token())
        except RequestTimeoutError:
            self.cancel_delete()
            self._notify(Notice("Timeout", "A operação demorou muito para responder.", "error"))
            return False
        except HttpStatusError:
            self.cancel_delete()
            self._notify(Notice("Erro", "Não foi possível deletar o cliente", "error"))
            return False
        except ClientAPIError:
            self.cancel_delete()
            self._notify(Notice("Erro", MSG_CONNECTION, "error"))
            return False

        self.cancel_delete()
        self._notify(Notice("Sucesso", "Cliente deletado com sucesso!"))
        await self.refresh()
        return True
