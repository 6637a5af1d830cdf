"""
Clientes TUI launcher.

Usage:
    python tui.py
    python tui.py --api-url http://192.168.0.10:3000
"""

import sys
from pathlib import Path

import click

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from modules.backend.core.config import validate_project_root
from modules.backend.core.logging import setup_logging


@click.command()
@click.option("--api-url", default=None, help="API base URL (default: application.yaml).")
@click.option("--debug", "-d", is_flag=True, help="Write DEBUG logs to logs/system.jsonl.")
def main(api_url: str | None, debug: bool) -> None:
    """Open the terminal client for the Clientes API."""
    validate_project_root()
    # The console belongs to Textual; logs only go to the file
    setup_logging(
        level="DEBUG" if debug else None,
        enable_console=False,
        enable_file_logging=True if debug else None,
    )

    from modules.tui.app import ClientesApp
    from modules.tui.client import ClientesAPI

    ClientesApp(api=ClientesAPI(base_url=api_url)).run()


if __name__ == "__main__":
    main()
