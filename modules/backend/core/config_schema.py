"""
Configuration Schemas.

One pydantic model per file in config/settings/. Unknown keys are errors,
so a misspelt setting fails at startup instead of being silently ignored.

    application.yaml    -> ApplicationSchema
    database.yaml       -> DatabaseSchema
    logging.yaml        -> LoggingSchema
    observability.yaml  -> ObservabilitySchema
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _StrictBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    """Where uvicorn binds."""

    host: str
    port: int = Field(ge=1, le=65535)


class CorsSchema(_StrictBase):
    """Allowed origins; ["*"] admits any origin without credentials."""

    origins: list[str] = Field(default_factory=list)


class TimeoutsSchema(_StrictBase):
    database: int = Field(gt=0)


class FrontendSchema(_StrictBase):
    """Terminal client: API address and the two cancellation policies."""

    api_base_url: str
    read_timeout_seconds: float = Field(gt=0)
    delete_timeout_seconds: float = Field(gt=0)

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: Literal["development", "test", "production"]
    debug: bool
    server: ServerSchema
    cors: CorsSchema
    timeouts: TimeoutsSchema
    frontend: FrontendSchema


# =============================================================================
# database.yaml
# =============================================================================


class DatabaseSchema(_StrictBase):
    """
    SQLAlchemy async driver plus connection details.

    For sqlite drivers `name` is the file (relative to the project root) and
    host, port and user are ignored; pool sizing only applies to server
    databases.
    """

    driver: str
    host: str
    port: int = Field(ge=0)
    name: str
    user: str
    pool_size: int = Field(gt=0)
    max_overflow: int = Field(ge=0)
    pool_timeout: int = Field(gt=0)
    pool_recycle: int
    echo: bool
    create_tables: bool


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    format: Literal["console", "json"]
    handlers: HandlersSchema


# =============================================================================
# observability.yaml
# =============================================================================


class HealthChecksSchema(_StrictBase):
    ready_timeout_seconds: float = Field(gt=0)


class ObservabilitySchema(_StrictBase):
    health_checks: HealthChecksSchema
