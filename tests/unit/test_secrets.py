"""
Tests for secrets manager and session id lookup.
"""

import pytest
from unittest.mock import MagicMock, patch
from sqlalchemy.engine import Result

from ahactl.errors import ConfigurationError
from ahactl.utils.secrets import SecretsManager
from ahactl.utils.session import SessionProvider


def _db_returning(mock_db_session, value):
    mock_result = MagicMock(spec=Result)
    mock_result.scalar_one_or_none.return_value = value
    mock_db_session.execute.return_value = mock_result


@pytest.mark.asyncio
async def test_get_existing_secret(mock_db_session):
    """Test getting an existing secret from database."""
    _db_returning(mock_db_session, "test_value")

    manager = SecretsManager(mock_db_session)
    value = await manager.get("test_key")

    assert value == "test_value"
    mock_db_session.execute.assert_called_once()


@pytest.mark.asyncio
async def test_get_nonexistent_secret(mock_db_session):
    """Test getting a secret that doesn't exist."""
    _db_returning(mock_db_session, None)

    manager = SecretsManager(mock_db_session)

    assert await manager.get("nonexistent_key") is None


@pytest.mark.asyncio
async def test_set_secret(mock_db_session):
    """Test setting a secret value (upsert)."""
    manager = SecretsManager(mock_db_session)
    await manager.set("test_key", "test_value")

    mock_db_session.execute.assert_called_once()
    mock_db_session.commit.assert_called_once()


@pytest.mark.asyncio
async def test_sid_from_secrets(mock_db_session):
    _db_returning(mock_db_session, "a1b2c3d4e5f60718")

    with patch.dict("os.environ", {"GATEWAY_SID": "from-env"}):
        sid = await SessionProvider(SecretsManager(mock_db_session)).get_sid()

    assert sid == "a1b2c3d4e5f60718"


@pytest.mark.asyncio
async def test_sid_falls_back_to_env(mock_db_session):
    _db_returning(mock_db_session, None)

    with patch.dict("os.environ", {"GATEWAY_SID": "from-env"}):
        sid = await SessionProvider(SecretsManager(mock_db_session)).get_sid()

    assert sid == "from-env"


@pytest.mark.asyncio
async def test_sid_missing(mock_db_session):
    _db_returning(mock_db_session, None)

    with patch.dict("os.environ", {}, clear=True):
        with pytest.raises(ConfigurationError) as exc_info:
            await SessionProvider(SecretsManager(mock_db_session)).get_sid()

    assert "gateway_sid" in str(exc_info.value)


@pytest.mark.asyncio
async def test_sid_sim_mode_skips_database(mock_db_session):
    sid = await SessionProvider(SecretsManager(mock_db_session), sim_mode=True).get_sid()

    assert sid == SessionProvider.SIM_SID
    mock_db_session.execute.assert_not_called()


@pytest.mark.asyncio
async def test_set_sid_stores_secret(mock_db_session):
    await SessionProvider(SecretsManager(mock_db_session)).set_sid("0123456789abcdef")

    mock_db_session.execute.assert_called_once()
    mock_db_session.commit.assert_called_once()
