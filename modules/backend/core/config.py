"""
Configuration Management.

Two sources, both located from the project root (the directory holding the
.project_root marker):

    config/.env               - secrets (DB_PASSWORD)
    config/settings/*.yaml    - everything else, one validated schema per file

Both are loaded once and cached; call reload_config() after changing files
or the working directory.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from modules.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
    ObservabilitySchema,
)

MARKER_FILE = ".project_root"
SETTINGS_DIR = Path("config") / "settings"
ENV_FILE = Path("config") / ".env"


def find_project_root(start: Path | None = None) -> Path:
    """
    Walk up from `start` (default: cwd) to the directory holding the marker.

    Raises:
        RuntimeError: If no parent directory has the marker file
    """
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / MARKER_FILE).exists():
            return candidate
    raise RuntimeError(f"Project root not found. Ensure {MARKER_FILE} file exists.")


def validate_project_root() -> Path:
    """
    Entry-script guard: like find_project_root, but exits with a readable
    message instead of a traceback.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Read one file from config/settings/. An empty file yields {}."""
    path = find_project_root() / SETTINGS_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


class Settings(BaseSettings):
    """Secrets from config/.env or the environment."""

    db_password: str = ""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_section(schema_cls: type[BaseModel], filename: str) -> Any:
    raw = load_yaml_config(filename)
    try:
        return schema_cls.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """
    Validated YAML settings, one typed section per file.

    A missing file, a missing key or an unknown key fails here, at startup.
    """

    def __init__(self) -> None:
        self._application: ApplicationSchema = _load_section(ApplicationSchema, "application.yaml")
        self._database: DatabaseSchema = _load_section(DatabaseSchema, "database.yaml")
        self._logging: LoggingSchema = _load_section(LoggingSchema, "logging.yaml")
        self._observability: ObservabilitySchema = _load_section(
            ObservabilitySchema, "observability.yaml"
        )

    @property
    def application(self) -> ApplicationSchema:
        """Identity, server address, CORS, timeouts, terminal client."""
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        return self._logging

    @property
    def observability(self) -> ObservabilitySchema:
        """Health check settings."""
        return self._observability


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=str(find_project_root() / ENV_FILE))


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig()


def reload_config() -> None:
    """Drop cached settings so the next access re-reads the files."""
    get_settings.cache_clear()
    get_app_config.cache_clear()


def get_database_url() -> str:
    """
    SQLAlchemy URL for database.yaml.

    SQLite drivers treat `name` as a file relative to the project root (or
    ":memory:") and take no credentials; every other driver gets
    user:password@host:port/name with the password from secrets.
    """
    db = get_app_config().database
    if db.driver.startswith("sqlite"):
        if db.name == ":memory:":
            return f"{db.driver}:///:memory:"
        return f"{db.driver}:///{find_project_root() / db.name}"

    password = get_settings().db_password
    return f"{db.driver}://{db.user}:{password}@{db.host}:{db.port}/{db.name}"


def get_server_base_url() -> tuple[str, float]:
    """(api_base_url, read timeout in seconds) for the terminal client."""
    frontend = get_app_config().application.frontend
    return frontend.api_base_url, float(frontend.read_timeout_seconds)
