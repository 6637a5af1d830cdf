"""
Centralized Logging Configuration.

structlog on top of the stdlib root logger, configured from
config/settings/logging.yaml. Every module logs through get_logger().

JSON records carry timestamp, level, logger, event, func_name and lineno,
plus whatever is bound in structlog contextvars (request_id, frontend,
method and path inside an HTTP request) and any keyword fields.

Usage:
    from modules.backend.core.logging import get_logger, setup_logging

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Cliente criado", extra={"cliente_id": 7})

    log_with_source(logger, "tui", "info", "Lista atualizada", total=3)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from modules.backend.core.config import find_project_root, get_app_config
from modules.backend.core.config_schema import FileHandlerSchema, LoggingSchema

VALID_SOURCES = frozenset({
    "web",
    "cli",
    "tui",
    "mobile",
    "api",
    "internal",
    "unknown",
})
"""Recognized values for the `source` field. Callers always pass it explicitly."""

# Third-party loggers that are too chatty below WARNING
_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")


def _get_logging_config() -> LoggingSchema:
    return get_app_config().logging


def _resolve_log_path(configured_path: str) -> Path:
    """Relative paths in logging.yaml are relative to the project root."""
    path = Path(configured_path)
    return path if path.is_absolute() else find_project_root() / path


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(renderer: Processor, pre_chain: list[Processor]) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def _file_handler(file_config: FileHandlerSchema, formatter: logging.Formatter) -> logging.Handler:
    log_path = _resolve_log_path(file_config.path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config.max_bytes,
        backupCount=file_config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Arguments left as None fall back to logging.yaml. Calling this again
    replaces the previous handlers.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
        format_type: 'console' (coloured, human readable) or 'json'.
        enable_console: Write to stdout. The terminal client turns this off.
        enable_file_logging: Write JSON lines to the rotating log file.
    """
    config = _get_logging_config()

    level_name = (level or config.level).upper()
    console_format = format_type or config.format
    console_on = config.handlers.console.enabled if enable_console is None else enable_console
    file_on = config.handlers.file.enabled if enable_file_logging is None else enable_file_logging

    pre_chain = _shared_processors()
    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = _formatter(structlog.processors.JSONRenderer(), pre_chain)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if console_on:
        console_handler = logging.StreamHandler(sys.stdout)
        if console_format == "console":
            console_handler.setFormatter(
                _formatter(structlog.dev.ConsoleRenderer(colors=True), pre_chain)
            )
        else:
            console_handler.setFormatter(json_formatter)
        root_logger.addHandler(console_handler)

    if file_on:
        root_logger.addHandler(_file_handler(config.handlers.file, json_formatter))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """structlog logger named after the calling module (pass __name__)."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log with an explicit `source` field.

    For code outside an HTTP request (terminal client, CLI), where the
    middleware has bound no frontend.

    Raises:
        AttributeError: If level is not a logger method
    """
    getattr(logger, level.lower())(message, source=source, **kwargs)
