"""
Integration Tests for Request Context.

Tests that request IDs, frontend identification and timing headers work
through the full request cycle.
"""

import uuid

import pytest


class TestRequestContextIntegration:
    """Integration tests for request context middleware."""

    @pytest.mark.asyncio
    async def test_response_includes_request_id(self, client):
        """Should include a generated X-Request-ID in the response."""
        response = await client.get("/health")

        uuid.UUID(response.headers["X-Request-ID"])

    @pytest.mark.asyncio
    async def test_incoming_request_id_preserved(self, client):
        """Should echo the client's X-Request-ID."""
        response = await client.get("/", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"

    @pytest.mark.asyncio
    async def test_response_time_header(self, client):
        response = await client.get("/")

        assert response.headers["X-Response-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_headers_present_on_errors(self, client):
        """Should tag 404 responses too."""
        response = await client.get("/clientes/999", headers={"X-Frontend-ID": "tui"})

        assert response.status_code == 404
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_unique_ids_per_request(self, client):
        first = await client.get("/health")
        second = await client.get("/health")

        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]
