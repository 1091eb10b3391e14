"""
Health check endpoints.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from ahactl.dependencies import get_control_service, is_sim_mode
from ahactl.errors import GatewayError
from ahactl.services.control_service import ControlService
from ahactl.utils.auth import verify_api_key
from ahactl.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(
    service: ControlService = Depends(get_control_service),
    _: str = Depends(verify_api_key)
):
    """
    Extended health check: can the gateway device list be fetched?

    Returns:
        dict: {
            "ok": true,
            "timestamp": "2024-01-01T12:00:00+00:00",
            "sim_mode": false,
            "gateway": {"reachable": true, "devices": 3}
        }
    """
    gateway = {"reachable": True, "devices": 0}
    try:
        device_list = await service.list_devices()
        gateway["devices"] = len(device_list.devices)
    except GatewayError as e:
        logger.warning("health_gateway_unreachable", error=str(e))
        gateway = {"reachable": False, "error": str(e)}

    return {
        "ok": gateway["reachable"],
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "sim_mode": is_sim_mode(),
        "gateway": gateway
    }
