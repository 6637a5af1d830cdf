"""
Unit test fixtures.

Nothing here touches a database or the network: sessions and loggers are
mocks, client records are plain values.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from modules.tui.models import Cliente


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Stand-in for AsyncSession.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = ClienteService(mock_db_session)
    """
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Logger double; assert on .debug/.info/.warning/.error/.exception.

    Usage:
        with patch("modules.backend.core.exception_handlers.logger", mock_logger):
            ...
        mock_logger.error.assert_called_once()
    """
    return MagicMock(spec=["debug", "info", "warning", "error", "exception"])


@pytest.fixture
def ana() -> Cliente:
    return Cliente(id=1, nome="Ana Silva", idade=30, uf="SP")


@pytest.fixture
def bruno() -> Cliente:
    return Cliente(id=2, nome="Bruno Costa", idade=45, uf="RJ")
