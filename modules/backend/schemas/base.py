"""
Base Schemas.

Response envelopes shared by every endpoint. The API returns resources
unwrapped; mutations answer with a MessageResponse and failures with an
ErrorResponse.
"""

from typing import Any

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Success indicator returned by mutations."""

    message: str
    id: int | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str | None = None
    details: dict[str, Any] | None = None
