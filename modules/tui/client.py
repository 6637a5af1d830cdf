"""
HTTP Client for the Clientes API.

Async httpx client used by the terminal app. Every call takes a
CancellationToken; failures are raised as ClientAPIError subclasses so the
caller can tell a timeout from a refused connection from an HTTP error.
All requests include the X-Frontend-ID: tui header for log routing.
"""

import asyncio
from typing import Any

import httpx

from modules.backend.core.logging import get_logger, log_with_source
from modules.tui.cancellation import CancellationToken
from modules.tui.models import Cliente, ClientePayload

logger = get_logger(__name__)


class ClientAPIError(Exception):
    """Base class for failures talking to the API."""


class RequestTimeoutError(ClientAPIError):
    """The request outlived its cancellation token."""


class RequestCancelledError(ClientAPIError):
    """The token was cancelled before the response arrived."""


class ConnectionFailedError(ClientAPIError):
    """Network-level failure: refused connection, DNS, reset, ..."""


class HttpStatusError(ClientAPIError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}")


class InvalidResponseError(ClientAPIError):
    """A 2xx response whose body is not the JSON the API documents."""


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        log_with_source(
            logger, "tui", "error", "Invalid API response",
            status_code=response.status_code, error=str(e),
        )
        raise InvalidResponseError("resposta inválida da API") from e


def _parse_cliente(data: Any) -> Cliente:
    try:
        return Cliente.from_json(data)
    except (KeyError, TypeError, ValueError) as e:
        log_with_source(
            logger, "tui", "error", "Invalid cliente record",
            error_type=type(e).__name__, error=str(e),
        )
        raise InvalidResponseError("registro de cliente inválido") from e


def _get_client_config() -> str:
    """Load the API base URL from application.yaml."""
    from modules.backend.core.config import get_server_base_url

    base_url, _ = get_server_base_url()
    return base_url


class ClientesAPI:
    """
    Typed access to the Clientes API.

    Usage:
        api = ClientesAPI()
        clientes = await api.list_clientes(READ_POLICY.new_token())
        await api.delete_cliente(7, DELETE_POLICY.new_token())
    """

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: API base URL. If None, read from config/settings/application.yaml.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self.base_url = (base_url or _get_client_config()).rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                transport=self._transport,
                headers={"X-Frontend-ID": "tui", "Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _send(
        self,
        method: str,
        path: str,
        token: CancellationToken,
        **kwargs: Any,
    ) -> httpx.Response:
        """Race the request against the token's deadline and cancellation."""
        client = await self._get_client()

        send = asyncio.ensure_future(
            client.request(method, path, timeout=token.remaining or None, **kwargs)
        )
        watcher = asyncio.ensure_future(token.wait_cancelled())
        try:
            done, _ = await asyncio.wait(
                {send, watcher},
                timeout=token.remaining,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            pending = [task for task in (send, watcher) if not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if send in done:
            try:
                return send.result()
            except httpx.TimeoutException as e:
                raise RequestTimeoutError(str(e)) from e
            except httpx.HTTPError as e:
                raise ConnectionFailedError(str(e)) from e

        if token.cancelled:
            raise RequestCancelledError(f"{method} {path} cancelled")
        raise RequestTimeoutError(
            f"{method} {path} exceeded {token.policy.timeout_seconds}s ({token.policy.name})"
        )

    async def request(
        self,
        method: str,
        path: str,
        token: CancellationToken,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the API.

        Returns:
            httpx.Response with a 2xx status

        Raises:
            RequestTimeoutError, RequestCancelledError, ConnectionFailedError,
            HttpStatusError
        """
        log_with_source(
            logger, "tui", "debug", "API request",
            method=method, path=path, policy=token.policy.name,
        )

        try:
            response = await self._send(method, path, token, **kwargs)
        except ClientAPIError as e:
            log_with_source(
                logger, "tui", "error", "API request failed",
                method=method, path=path, error_type=type(e).__name__, error=str(e),
            )
            raise

        log_with_source(
            logger, "tui", "debug", "API response",
            method=method, path=path, status_code=response.status_code,
        )

        if not response.is_success:
            raise HttpStatusError(response.status_code, response.text)
        return response

    async def list_clientes(self, token: CancellationToken) -> list[Cliente]:
        """Fetch every client. A body that is not a JSON array counts as empty."""
        """
        Fetch every client. A body that is not a JSON array counts as empty.

        Raises:
            InvalidResponseError: Body is not JSON or holds a malformed record
        """
        response = await self.request("GET", "/", token)
        data = _decode(response)
        if not isinstance(data, list):
            return []
        return [_parse_cliente(item) for item in data]

    async def get_cliente(self, cliente_id: int, token: CancellationToken) -> Cliente:
        response = await self.request("GET", f"/clientes/{cliente_id}", token)
        return _parse_cliente(_decode(response))

    async def create_cliente(self, payload: ClientePayload, token: CancellationToken) -> int | None:
        """
        Create a client; returns the new ID when the API reports it.

        The 2xx status alone means success, so an unreadable body gives None.
        """
        response = await self.request("POST", "/clientes", token, json=payload.to_json())
        try:
            data = _decode(response)
        except InvalidResponseError:
            return None
        return data.get("id") if isinstance(data, dict) else None

    async def update_cliente(
        self,
        cliente_id: int,
        payload: ClientePayload,
        token: CancellationToken,
    ) -> None:
        await self.request("PUT", f"/clientes/{cliente_id}", token, json=payload.to_json())

    async def delete_cliente(self, cliente_id: int, token: CancellationToken) -> None:
        await self.request("DELETE", f"/clientes/{cliente_id}", token)
