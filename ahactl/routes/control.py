"""
Device control endpoints.

This is a thin HTTP adapter - all dispatch logic is in ControlService.
Gateway errors are translated to responses by the handlers in main.
"""

from typing import List
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from ahactl.dependencies import get_control_service
from ahactl.services.command_service import to_half_degrees
from ahactl.services.control_service import ControlService
from ahactl.utils.auth import verify_api_key
from ahactl.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


class DevicesRequest(BaseModel):
    """Request model for the switch and toggle endpoints."""
    devices: List[str] = Field(..., min_length=1)

    @field_validator("devices")
    @classmethod
    def strip_names(cls, value: List[str]) -> List[str]:
        names = [name.strip() for name in value]
        if any(not name for name in names):
            raise ValueError("device names must not be blank")
        return names


class TemperatureRequest(DevicesRequest):
    """Request model for /temperature; value in degrees Celsius."""
    value: float = Field(..., allow_inf_nan=False)

    @field_validator("value")
    @classmethod
    def representable(cls, value: float) -> float:
        # Raises ValueError when doubling overflows
        to_half_degrees(value)
        return value


def _summary(names: List[str]) -> dict:
    return {
        "ok": True,
        "summary": f"Processed {len(names)} devices",
        "devices": names
    }


@router.post("/switch/on")
async def switch_on(
    request: DevicesRequest,
    service: ControlService = Depends(get_control_service),
    _: str = Depends(verify_api_key)
):
    """
    Switch devices on.

    Returns:
        dict: {"ok": true, "summary": "Processed N devices", "devices": [...]}
    """
    await service.switch_on(*request.devices)
    return _summary(request.devices)


@router.post("/switch/off")
async def switch_off(
    request: DevicesRequest,
    service: ControlService = Depends(get_control_service),
    _: str = Depends(verify_api_key)
):
    """Switch devices off."""
    await service.switch_off(*request.devices)
    return _summary(request.devices)


@router.post("/toggle")
async def toggle(
    request: DevicesRequest,
    service: ControlService = Depends(get_control_service),
    _: str = Depends(verify_api_key)
):
    """Toggle the on/off state of devices."""
    await service.toggle(*request.devices)
    return _summary(request.devices)


@router.post("/temperature")
async def set_temperature(
    request: TemperatureRequest,
    service: ControlService = Depends(get_control_service),
    _: str = Depends(verify_api_key)
):
    """
    Set thermostat target temperature.

    The value is sent in half-degree steps, rounded half away from zero.
    """
    logger.info("temperature_requested", value=request.value, devices=request.devices)
    await service.temperature(request.value, *request.devices)
    return _summary(request.devices)
