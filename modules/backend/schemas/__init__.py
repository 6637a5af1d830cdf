# Pydantic schemas package
from modules.backend.schemas.base import ErrorResponse, MessageResponse

__all__ = [
    "ErrorResponse",
    "MessageResponse",
]
