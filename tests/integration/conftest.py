"""
Integration Test Fixtures.

Fixtures for integration tests - real application, real (in-memory) database.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.database import get_db_session
from modules.tui.client import ClientesAPI


@pytest.fixture
def app(db_session: AsyncSession):
    """FastAPI app whose requests all use the test session."""
    from modules.backend.main import create_app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    application = create_app()
    application.dependency_overrides[get_db_session] = override_get_db_session
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client talking to the app in-process.

    Usage:
        async def test_list(client: AsyncClient):
            response = await client.get("/")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


@pytest.fixture
async def clientes_api(app) -> AsyncGenerator[ClientesAPI, None]:
    """Terminal-client API wrapper wired to the in-process app."""
    api = ClientesAPI(base_url="http://test", transport=ASGITransport(app=app))
    yield api
    await api.close()


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_message(
        response: httpx.Response,
        expected_status: int,
        expected_message: str,
    ) -> dict[str, Any]:
        """Assert a success indicator response."""
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data["message"] == expected_message
        return data

    @staticmethod
    def assert_error(
        response: httpx.Response,
        expected_status: int,
        expected_error: str | None = None,
    ) -> dict[str, Any]:
        """Assert an error response carrying an `error` field."""
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert "error" in data, f"Missing error field: {data}"
        if expected_error is not None:
            assert data["error"] == expected_error
        return data

    @staticmethod
    def assert_validation_error(
        response: httpx.Response,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert a 422 validation error, optionally for one field."""
        data = ApiAssertions.assert_error(response, 422, "Dados inválidos")
        assert data["code"] == "VAL_REQUEST_INVALID"

        if field:
            errors = data.get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
