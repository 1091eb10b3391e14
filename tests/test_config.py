"""
Tests for configuration loading and validation.
"""

import json
import os

import pytest
from pydantic import ValidationError
from unittest.mock import MagicMock
from sqlalchemy.engine import Result

from ahactl.config import ConfigManager, load_config_from_file
from ahactl.models.config import AppConfig, GatewayConfig

SAMPLE_CONFIG = os.path.join(os.path.dirname(__file__), "fixtures", "sample_config.json")


def _db_returning(mock_db_session, row):
    mock_result = MagicMock(spec=Result)
    mock_result.scalar_one_or_none.return_value = row
    mock_db_session.execute.return_value = mock_result


def test_load_sample_config():
    """Test loading and validating the sample config."""
    config = load_config_from_file(SAMPLE_CONFIG)

    assert config.gateway.protocol == "https"
    assert config.gateway.host == "192.168.178.1"
    assert config.gateway.port == 443
    assert config.gateway.verify_tls is False
    assert config.gateway.max_concurrency == 8


def test_gateway_config_defaults():
    """Test GatewayConfig defaults."""
    gateway = GatewayConfig()

    assert gateway.protocol == "https"
    assert gateway.host == "fritz.box"
    assert gateway.port is None
    assert gateway.timeout_seconds == 10.0
    assert gateway.verify_tls is True
    assert gateway.max_concurrency is None


@pytest.mark.parametrize("data", [
    {"protocol": "ftp"},
    {"port": 0},
    {"port": 70000},
    {"timeout_seconds": 0},
    {"max_concurrency": 0},
])
def test_gateway_config_rejects_invalid_values(data):
    with pytest.raises(ValidationError):
        GatewayConfig(**data)


def test_config_validation_allows_extra_fields():
    """Unknown top-level fields are kept for forward compatibility."""
    config = AppConfig(gateway={"host": "fritz.box"}, future_field="allowed")

    assert config.gateway.host == "fritz.box"


@pytest.mark.asyncio
async def test_load_config_prefers_database(mock_db_session, tmp_path):
    row = MagicMock()
    row.config_json = json.dumps({"gateway": {"host": "db.example"}})
    _db_returning(mock_db_session, row)

    manager = ConfigManager(mock_db_session, config_path=str(tmp_path / "missing.json"))
    config = await manager.load_config()

    assert config.gateway.host == "db.example"


@pytest.mark.asyncio
async def test_load_config_falls_back_to_file(mock_db_session):
    _db_returning(mock_db_session, None)

    config = await ConfigManager(mock_db_session, config_path=SAMPLE_CONFIG).load_config()

    assert config.gateway.host == "192.168.178.1"


@pytest.mark.asyncio
async def test_load_config_missing_everywhere(mock_db_session, tmp_path):
    _db_returning(mock_db_session, None)

    manager = ConfigManager(mock_db_session, config_path=str(tmp_path / "missing.json"))

    with pytest.raises(FileNotFoundError):
        await manager.load_config()


@pytest.mark.asyncio
async def test_save_config_upserts(mock_db_session):
    manager = ConfigManager(mock_db_session)

    assert await manager.save_config(AppConfig()) is True

    mock_db_session.execute.assert_called_once()
    mock_db_session.commit.assert_called_once()
