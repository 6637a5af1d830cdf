"""
Application Exceptions.

Raised by services, rendered by exception_handlers. `message` is shown to
the API client verbatim; `code` is a stable machine-readable identifier.
"""


class ApplicationError(Exception):
    """Root of the hierarchy. Unmapped subclasses answer 500."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class NotFoundError(ApplicationError):
    """No record with the requested ID (404)."""

    def __init__(self, message: str = "Recurso não encontrado") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """A business rule rejected the input (400)."""

    def __init__(self, message: str = "Dados inválidos", details: dict | None = None) -> None:
        super().__init__(message, code="VAL_VALIDATION_ERROR")
        self.details = details or {}


class DatabaseError(ApplicationError):
    """Storage failed (500). The message is the endpoint's fixed text."""

    def __init__(self, message: str = "Erro no banco de dados") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")
