"""
Device listing endpoint.
"""

from typing import Any, Dict, List
from fastapi import APIRouter, Depends

from ahactl.dependencies import get_control_service
from ahactl.models.device import Device
from ahactl.services.control_service import ControlService
from ahactl.utils.auth import verify_api_key

router = APIRouter()


def _device_to_dict(device: Device) -> Dict[str, Any]:
    """Flatten a Device into the listing format."""
    state = None
    if device.switch and device.switch.state in ("0", "1"):
        state = "on" if device.switch.state == "1" else "off"

    return {
        "name": device.name,
        "ain": device.ain,
        "product": device.productname,
        "manufacturer": device.manufacturer,
        "firmware": device.fwversion,
        "present": device.present,
        "state": state,
        "temperature": device.temperature_celsius,
        "target": device.target_celsius
    }


@router.get("/devices")
async def list_devices(
    service: ControlService = Depends(get_control_service),
    _: str = Depends(verify_api_key)
):
    """
    List all devices known to the gateway.

    Returns:
        dict: {"devices": [{"name": "Lamp", "ain": "116570018736", ...}]}
    """
    device_list = await service.list_devices()
    devices: List[Dict[str, Any]] = [_device_to_dict(d) for d in device_list.devices]
    return {"devices": devices}
