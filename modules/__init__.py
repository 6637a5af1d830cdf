"""
Application Modules.

- backend/: Clientes API (FastAPI), database, configuration, logging
- tui/: Terminal client for the API (Textual + httpx)
"""
