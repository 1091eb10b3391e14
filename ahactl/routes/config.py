"""
Gateway configuration and session id endpoints.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, ValidationError, field_validator

from ahactl.config import ConfigManager
from ahactl.dependencies import get_config_manager, get_session_provider
from ahactl.models.config import AppConfig
from ahactl.utils.auth import verify_api_key
from ahactl.utils.logging import get_logger
from ahactl.utils.session import SessionProvider

logger = get_logger(__name__)

router = APIRouter()


class SessionRequest(BaseModel):
    """Request model for /session."""
    sid: str = Field(..., min_length=1)

    @field_validator("sid")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("sid must not be blank")
        return value


@router.get("/config")
async def get_config(
    config_mgr: ConfigManager = Depends(get_config_manager),
    _: str = Depends(verify_api_key)
):
    """
    Current configuration, from the database or config.json.

    Returns:
        dict: Full configuration object
    """
    try:
        config = await config_mgr.load_config()
    except FileNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Configuration not found"
        )
    return config.model_dump()


@router.put("/config")
async def update_config(
    config_data: Dict[str, Any],
    config_mgr: ConfigManager = Depends(get_config_manager),
    _: str = Depends(verify_api_key)
):
    """
    Update configuration.

    Accepts a partial or complete config object, merged into the stored one.
    The result is validated before anything is written.

    Returns:
        dict: {"ok": true}
    """
    try:
        existing = (await config_mgr.load_config()).model_dump()
    except FileNotFoundError:
        existing = {}

    try:
        new_config = AppConfig(**deep_merge(existing, config_data))
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid configuration: {e.error_count()} error(s): "
                   + "; ".join(err["msg"] for err in e.errors())
        )

    await config_mgr.save_config(new_config)
    logger.info("config_updated", gateway_host=new_config.gateway.host)
    return {"ok": True}


@router.put("/session")
async def store_session(
    request: SessionRequest,
    sessions: SessionProvider = Depends(get_session_provider),
    _: str = Depends(verify_api_key)
):
    """
    Store a gateway session id obtained out of band.

    Subsequent device requests use it in preference to GATEWAY_SID.
    """
    await sessions.set_sid(request.sid)
    return {"ok": True}


def deep_merge(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Merge updates into a copy of base, recursing into nested dicts."""
    result = base.copy()

    for key, value in updates.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result
