"""
Exception Handlers.

Every failure leaves the API as `{"error": <message>, "code": <code>}`,
plus `details` for validation problems. Handlers log first, then answer.

Usage:
    from modules.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from modules.backend.core.exceptions import (
    ApplicationError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from modules.backend.core.logging import get_logger
from modules.backend.schemas.base import ErrorResponse

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    DatabaseError: 500,
}

MSG_INVALID_REQUEST = "Dados inválidos"
MSG_INTERNAL_ERROR = "Erro interno"


def _get_request_id(request: Request) -> str | None:
    """Request ID set by RequestContextMiddleware, else the raw header."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _request_fields(request: Request) -> dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "request_id": _get_request_id(request),
    }


def _respond(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def _validation_details(exc: RequestValidationError) -> dict[str, list[dict[str, str]]]:
    """One entry per failing input, field given as its dotted location."""
    return {
        "validation_errors": [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", "Validation error"),
                "type": err.get("type", "unknown"),
            }
            for err in exc.errors()
        ]
    }


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """Map an ApplicationError to its status; the message goes out as is."""
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)
    fields = {"code": exc.code, "status": status_code, **_request_fields(request)}

    if status_code >= 500:
        logger.error(exc.message, extra=fields)
    else:
        logger.warning(exc.message, extra=fields)

    details = exc.details or None if isinstance(exc, ValidationError) else None
    return _respond(status_code, ErrorResponse(error=exc.message, code=exc.code, details=details))


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Bad JSON, bad field values and bad path parameters all answer 422."""
    details = _validation_details(exc)
    logger.warning(
        "Request validation failed",
        extra={"error_count": len(details["validation_errors"]), **_request_fields(request)},
    )
    return _respond(
        422,
        ErrorResponse(error=MSG_INVALID_REQUEST, code="VAL_REQUEST_INVALID", details=details),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Log the traceback; the client only learns that something failed."""
    logger.exception(
        "Unhandled exception",
        extra={"exception_type": type(exc).__name__, **_request_fields(request)},
    )
    return _respond(500, ErrorResponse(error=MSG_INTERNAL_ERROR, code="SYS_INTERNAL_ERROR"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
