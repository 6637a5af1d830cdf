#!/usr/bin/env python3
"""
Clientes command line.

One entry point for running and inspecting the project:

    python cli.py --service server [--port 3001] [--reload]
    python cli.py --service tui
    python cli.py --service health
    python cli.py --service config
    python cli.py --service test [--test-type unit|integration]
    python cli.py                      # info
"""

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
import structlog

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from modules.backend.core.config import get_app_config, validate_project_root
from modules.backend.core.logging import get_logger, setup_logging

SERVICES = ("server", "tui", "health", "config", "test", "info")
TEST_SUITES = {"all": "tests/", "unit": "tests/unit", "integration": "tests/integration"}


def _log_level(verbose: bool, debug: bool) -> str:
    if debug:
        return "DEBUG"
    return "INFO" if verbose else "WARNING"


def _fail(message: str, code: int = 1) -> None:
    click.secho(message, fg="red", err=True)
    sys.exit(code)


@click.command()
@click.option("--service", "-s", type=click.Choice(SERVICES), default="info",
              help="What to run.")
@click.option("--verbose", "-v", is_flag=True, help="Log at INFO.")
@click.option("--debug", "-d", is_flag=True, help="Log at DEBUG.")
@click.option("--host", default=None, help="Bind address for the server (default: application.yaml).")
@click.option("--port", default=None, type=int, help="Port for the server (default: application.yaml).")
@click.option("--reload", is_flag=True, help="Restart the server on code changes.")
@click.option("--test-type", type=click.Choice(list(TEST_SUITES)), default="all",
              help="Which test suite --service test runs.")
def main(
    service: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
) -> None:
    """
    Run or inspect the Clientes API and its terminal client.

    \b
    Examples:
        python cli.py --service server --verbose
        python cli.py --service server --port 3001 --reload
        python cli.py --service tui
        python cli.py --service test --test-type integration
    """
    validate_project_root()

    level = _log_level(verbose, debug)
    # Textual draws on the whole terminal, so the TUI gets no console logs
    setup_logging(level=level, enable_console=service != "tui", format_type="console")
    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)
    logger.debug("CLI invoked", extra={"service": service, "log_level": level})

    handlers: dict[str, Callable[[], None]] = {
        "server": lambda: run_server(logger, host, port, reload),
        "tui": lambda: run_tui(logger),
        "health": lambda: check_health(logger),
        "config": lambda: show_config(logger),
        "test": lambda: run_tests(logger, test_type),
        "info": show_info,
    }
    handlers[service]()


def run_server(logger: Any, host: str | None, port: int | None, reload: bool) -> None:
    """Run uvicorn in a child process."""
    try:
        server = get_app_config().application.server
    except (FileNotFoundError, ValueError) as e:
        logger.error("Configuration could not be loaded", extra={"error": str(e)})
        _fail(f"Error: {e}")

    bind_host = host or server.host
    bind_port = port or server.port

    cmd = [
        sys.executable, "-m", "uvicorn", "modules.backend.main:app",
        "--host", bind_host, "--port", str(bind_port),
    ]
    if reload:
        cmd.append("--reload")

    logger.info("Starting server", extra={"host": bind_host, "port": bind_port, "reload": reload})
    click.echo(f"API rodando em http://{bind_host}:{bind_port}")
    click.echo("Ctrl+C para parar\n")

    try:
        subprocess.run(cmd, check=True, cwd=PROJECT_ROOT)
    except KeyboardInterrupt:
        logger.info("Server interrupted")
    except subprocess.CalledProcessError as e:
        logger.error("Server exited with an error", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def run_tui(logger: Any) -> None:
    from modules.tui.app import ClientesApp

    logger.info("Starting TUI")
    ClientesApp().run()


def _check_config() -> str:
    return f"app: {get_app_config().application.name}"


def _check_app() -> str:
    from modules.backend.main import get_app

    return f"title: {get_app().title}"


def _check_api() -> str:
    import httpx

    from modules.backend.core.config import get_server_base_url

    base_url, timeout = get_server_base_url()
    response = httpx.get(f"{base_url}/health/ready", timeout=timeout)
    response.raise_for_status()
    return f"{base_url} -> HTTP {response.status_code}"


def check_health(logger: Any) -> None:
    """Configuration loads, the app builds, and the running API is ready."""
    checks: list[tuple[str, Callable[[], str]]] = [
        ("YAML configuration", _check_config),
        ("FastAPI application", _check_app),
        ("API readiness", _check_api),
    ]

    click.echo("Health checks")
    click.echo("-" * 50)
    failures = 0
    for name, check in checks:
        try:
            detail = check()
        except Exception as e:
            failures += 1
            logger.warning("Health check failed", extra={"check": name, "error": str(e)})
            click.echo(f"  {click.style('FAIL', fg='red')}  {name} ({e})")
        else:
            click.echo(f"  {click.style('PASS', fg='green')}  {name} ({detail})")
    click.echo("-" * 50)

    if failures:
        _fail(f"{failures} check(s) failed.")
    click.secho("All checks passed.", fg="green")


def show_config(logger: Any) -> None:
    """Print every validated YAML section."""
    try:
        config = get_app_config()
    except (FileNotFoundError, ValueError) as e:
        logger.error("Configuration could not be loaded", extra={"error": str(e)})
        _fail(f"Error loading configuration: {e}")

    sections = {
        "Application": config.application,
        "Database": config.database,
        "Logging": config.logging,
        "Observability": config.observability,
    }
    for title, section in sections.items():
        click.echo(f"\n{title} Settings")
        click.echo("-" * 40)
        for key, value in section.model_dump().items():
            click.echo(f"  {key}: {value}")


def run_tests(logger: Any, test_type: str) -> None:
    cmd = [sys.executable, "-m", "pytest", TEST_SUITES[test_type], "-v"]
    logger.info("Running tests", extra={"suite": test_type})
    click.echo(" ".join(cmd) + "\n")
    sys.exit(subprocess.run(cmd, cwd=PROJECT_ROOT).returncode)


def show_info() -> None:
    application = get_app_config().application
    click.echo(f"{application.name} {application.version}")
    click.echo(application.description)
    click.echo("=" * 40)
    click.echo("Services (--service):")
    click.echo("  server   API server (uvicorn)")
    click.echo("  tui      Terminal client")
    click.echo("  health   Check configuration and the running API")
    click.echo("  config   Print configuration")
    click.echo("  test     Run the test suite")
    click.echo("  info     This summary")


if __name__ == "__main__":
    main()
