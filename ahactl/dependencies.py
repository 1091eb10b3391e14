"""
FastAPI dependency injection for common services.
Centralizes client initialization to avoid repetition.
"""

import os
from typing import AsyncGenerator
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ahactl.config import ConfigManager
from ahactl.database import get_db
from ahactl.devices.aha_client import AhaClient
from ahactl.services.control_service import ControlService
from ahactl.utils.secrets import SecretsManager
from ahactl.utils.session import SessionProvider


def is_sim_mode() -> bool:
    """SIM_MODE=true disables all gateway traffic."""
    return os.getenv("SIM_MODE", "false").lower() == "true"


async def get_config_manager(
    db: AsyncSession = Depends(get_db)
) -> ConfigManager:
    """Dependency that provides a ConfigManager instance."""
    return ConfigManager(db)


async def get_session_provider(
    db: AsyncSession = Depends(get_db)
) -> SessionProvider:
    """Dependency that provides the session id store."""
    return SessionProvider(SecretsManager(db), sim_mode=is_sim_mode())


async def get_aha_client(
    sessions: SessionProvider = Depends(get_session_provider),
    config_mgr: ConfigManager = Depends(get_config_manager)
) -> AsyncGenerator[AhaClient, None]:
    """
    Dependency that provides a gateway client for the duration of a request.

    Raises:
        FileNotFoundError: If no configuration is stored
        ConfigurationError: If no session id is available
    """
    config = await config_mgr.load_config()
    sid = await sessions.get_sid()

    async with AhaClient(config.gateway, sid, sim_mode=sessions.sim_mode) as client:
        yield client


async def get_control_service(
    client: AhaClient = Depends(get_aha_client)
) -> ControlService:
    """Dependency that provides a ControlService bound to the request's client."""
    return ControlService(client)
