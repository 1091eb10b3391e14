"""
Device directory - resolves device names to gateway addresses (ains).
"""

from typing import Dict

import httpx

from ahactl.devices.aha_client import AhaClient
from ahactl.errors import DirectoryFetchError, describe
from ahactl.models.device import DeviceList
from ahactl.utils.logging import get_logger

logger = get_logger(__name__)


class DeviceDirectory:
    """
    Name to ain lookup built from a fresh device listing on every call.

    Nothing is cached: two resolve() calls fetch the listing twice.
    """

    def __init__(self, client: AhaClient):
        self.client = client

    async def fetch(self) -> DeviceList:
        """
        Fetch the device listing.

        Raises:
            DirectoryFetchError: On transport or decode failure (no retry)
        """
        try:
            return await self.client.list_devices()
        except httpx.HTTPError as e:
            logger.error("directory_fetch_failed", error=describe(e))
            raise DirectoryFetchError(describe(e)) from e
        except DirectoryFetchError as e:
            logger.error("directory_fetch_failed", error=str(e))
            raise

    async def resolve(self) -> Dict[str, str]:
        """
        Build the name to ain table.

        Duplicate names in the listing overwrite each other (last one wins).

        Returns:
            Dict mapping device name to whitespace-free ain
        """
        device_list = await self.fetch()

        table: Dict[str, str] = {}
        for device in device_list.devices:
            table[device.name] = device.ain
        return table
