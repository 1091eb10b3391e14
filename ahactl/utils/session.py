"""
Session id lookup.

Obtaining and renewing a session id happens outside this service; here the
id is read from the secrets table or the GATEWAY_SID environment variable.
"""

import os

from ahactl.errors import ConfigurationError
from ahactl.utils.logging import get_logger
from ahactl.utils.secrets import SecretsManager

logger = get_logger(__name__)


class SessionProvider:
    """Supplies the session id sent with every gateway request."""

    SID_KEY = "gateway_sid"
    SIM_SID = "sim0000000000000"

    def __init__(self, secrets: SecretsManager, sim_mode: bool = False):
        self.secrets = secrets
        self.sim_mode = sim_mode

    async def get_sid(self) -> str:
        """
        Current session id.

        Raises:
            ConfigurationError: If no session id is stored or configured
        """
        if self.sim_mode:
            logger.info("[SIM] Using fake gateway session id")
            return self.SIM_SID

        sid = await self.secrets.get(self.SID_KEY)
        if sid:
            return sid

        sid = os.getenv("GATEWAY_SID")
        if sid:
            return sid

        raise ConfigurationError(
            f"No gateway session id found in secrets ('{self.SID_KEY}') or GATEWAY_SID"
        )

    async def set_sid(self, sid: str) -> None:
        """Store a session id obtained elsewhere."""
        await self.secrets.set(self.SID_KEY, sid)
        logger.info("gateway_sid_stored")
