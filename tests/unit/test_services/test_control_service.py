"""
Tests for the public control API.
"""

import pytest

from ahactl.devices.aha_client import AhaClient
from ahactl.errors import UnknownDeviceError
from ahactl.models.config import GatewayConfig
from ahactl.services.control_service import ControlService


@pytest.mark.asyncio
async def test_list_devices(aha_client):
    service = ControlService(aha_client)

    device_list = await service.list_devices()

    assert [d.name for d in device_list.devices] == ["Lamp", "Plug", "Radiator"]


@pytest.mark.asyncio
@pytest.mark.parametrize("method, switchcmd", [
    ("switch_on", "setswitchon"),
    ("switch_off", "setswitchoff"),
    ("toggle", "setswitchtoggle"),
])
async def test_switch_commands(aha_client, gateway, method, switchcmd):
    service = ControlService(aha_client)

    await getattr(service, method)("Lamp", "Plug")

    assert sorted(r.url.params["switchcmd"] for r in gateway.command_requests) == [switchcmd] * 2


@pytest.mark.asyncio
async def test_temperature(aha_client, gateway):
    service = ControlService(aha_client)

    await service.temperature(21.3, "Radiator")

    assert gateway.command_requests[0].url.params["param"] == "43"


@pytest.mark.asyncio
async def test_unknown_device(aha_client, gateway):
    service = ControlService(aha_client)

    with pytest.raises(UnknownDeviceError):
        await service.switch_on("Fan")

    assert gateway.command_requests == []


def test_max_concurrency_from_config(aha_client):
    client = AhaClient(GatewayConfig(max_concurrency=4), "sid")

    assert ControlService(client).dispatcher.max_concurrency == 4
    assert ControlService(aha_client).dispatcher.max_concurrency is None


@pytest.mark.asyncio
async def test_sim_mode_round_trip(captured_logs):
    """Sim mode lists sample devices and accepts commands without network."""
    async with AhaClient(GatewayConfig(), "sid", sim_mode=True) as client:
        service = ControlService(client)
        await service.switch_on("Lamp", "Plug")
        await service.temperature(20.5, "Radiator")

    processed = [e for e in captured_logs if e["event"] == "device_processed"]
    assert [e["response"] for e in processed if e["device"] == "Radiator"] == ["41"]
    assert len(processed) == 3
