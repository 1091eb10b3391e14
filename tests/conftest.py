"""
Pytest fixtures for testing.
Provides mock database sessions, a fake gateway and log capture.
"""

import os
from typing import Dict, List, Union

import httpx
import pytest
from structlog.testing import capture_logs
from unittest.mock import AsyncMock
from sqlalchemy.ext.asyncio import AsyncSession

from ahactl.devices.aha_client import AhaClient
from ahactl.models.config import GatewayConfig

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def load_fixture(name: str) -> str:
    with open(os.path.join(FIXTURES_DIR, name)) as f:
        return f.read()


class FakeGateway:
    """
    In-memory stand-in for the gateway's homeautoswitch.lua endpoint.

    failures maps an ain to an HTTP status code (returned as-is) or to a
    message (raised as httpx.ConnectError).
    """

    def __init__(self, device_list: str):
        self.device_list = device_list
        self.list_status = 200
        self.list_requests: List[httpx.Request] = []
        self.command_requests: List[httpx.Request] = []
        self.failures: Dict[str, Union[int, str]] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.params.get("switchcmd") == "getdevicelistinfos":
            self.list_requests.append(request)
            return httpx.Response(self.list_status, text=self.device_list)

        self.command_requests.append(request)
        failure = self.failures.get(request.url.params.get("ain"))
        if isinstance(failure, str):
            raise httpx.ConnectError(failure, request=request)
        if isinstance(failure, int):
            return httpx.Response(failure, text="failed")
        return httpx.Response(200, text="1\n")

    def commanded_ains(self) -> List[str]:
        return [r.url.params.get("ain") for r in self.command_requests]


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session for testing.
    Use this when you need a database session but don't want real DB operations.
    """
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def device_list_xml():
    return load_fixture("devicelist.xml")


@pytest.fixture
def gateway(device_list_xml):
    return FakeGateway(device_list_xml)


@pytest.fixture
def gateway_config():
    return GatewayConfig(protocol="http", host="fritz.box", port=80)


@pytest.fixture
def aha_client(gateway, gateway_config):
    """AhaClient whose requests are answered by the fake gateway."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(gateway.handler))
    return AhaClient(gateway_config, "abc123", http_client=http_client)


@pytest.fixture
def captured_logs():
    """Structlog events emitted while the test runs, as dicts."""
    with capture_logs() as logs:
        yield logs
