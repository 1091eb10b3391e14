"""
Control service - the public device API.

Listing plus the four batch commands; every command goes through
DispatchService.
"""

from ahactl.devices.aha_client import AhaClient
from ahactl.models.device import DeviceList
from ahactl.services.command_service import SetTemperature, SwitchOff, SwitchOn, Toggle
from ahactl.services.directory_service import DeviceDirectory
from ahactl.services.dispatch_service import DispatchService


class ControlService:
    """
    Service for listing and controlling gateway devices by name.

    Each method raises DirectoryFetchError, UnknownDeviceError or
    AggregateError (see DispatchService.dispatch).
    """

    def __init__(self, client: AhaClient):
        """
        Initialize control service.

        Args:
            client: Gateway client; its config supplies max_concurrency
        """
        self.client = client
        self.directory = DeviceDirectory(client)
        self.dispatcher = DispatchService(
            client,
            directory=self.directory,
            max_concurrency=client.config.max_concurrency
        )

    async def list_devices(self) -> DeviceList:
        """List the basic data of all devices."""
        return await self.directory.fetch()

    async def switch_on(self, *names: str) -> None:
        """Switch devices on."""
        await self.dispatcher.dispatch(SwitchOn(), names)

    async def switch_off(self, *names: str) -> None:
        """Switch devices off."""
        await self.dispatcher.dispatch(SwitchOff(), names)

    async def toggle(self, *names: str) -> None:
        """Toggle the on/off state of devices."""
        await self.dispatcher.dispatch(Toggle(), names)

    async def temperature(self, value: float, *names: str) -> None:
        """Set the target temperature (Celsius) of thermostat devices."""
        await self.dispatcher.dispatch(SetTemperature(value), names)
