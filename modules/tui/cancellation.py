"""
Request Cancellation.

A CancellationPolicy names a timeout; every request gets a fresh
CancellationToken from a policy. The token aborts the in-flight call when
its deadline passes or when cancel() is called.

Usage:
    token = READ_POLICY.new_token()
    clientes = await api.list_clientes(token)
"""

import asyncio
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class CancellationPolicy:
    """Named timeout applied to a family of requests."""

    name: str
    timeout_seconds: float

    def new_token(self) -> "CancellationToken":
        return CancellationToken(self)


class CancellationToken:
    """Deadline plus explicit cancellation for a single request."""

    def __init__(self, policy: CancellationPolicy) -> None:
        self.policy = policy
        self._deadline = time.monotonic() + policy.timeout_seconds
        self._cancelled = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def remaining(self) -> float:
        """Seconds left before the deadline, never negative."""
        return max(0.0, self._deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.remaining == 0.0

    def cancel(self) -> None:
        self._cancelled.set()

    async def wait_cancelled(self) -> None:
        await self._cancelled.wait()


# Reads and create/update submissions
READ_POLICY = CancellationPolicy("read", 10.0)
DELETE_POLICY = CancellationPolicy("delete", 8.0)


def policies_from_config() -> tuple[CancellationPolicy, CancellationPolicy]:
    """Build (read, delete) policies from application.yaml."""
    from modules.backend.core.config import get_app_config

    frontend = get_app_config().application.frontend
    return (
        CancellationPolicy("read", frontend.read_timeout_seconds),
        CancellationPolicy("delete", frontend.delete_timeout_seconds),
    )
