"""
API key guard for the HTTP endpoints.

The key travels in the x-api-key header and is declared as an OpenAPI
security scheme, so /docs offers an "Authorize" button for it.
"""

import hmac
import os
from typing import Optional

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from ahactl.errors import ConfigurationError
from ahactl.utils.logging import get_logger

logger = get_logger(__name__)

api_key_header = APIKeyHeader(
    name="x-api-key",
    auto_error=False,
    description="Must match the API_KEY environment variable"
)


class ApiKeyGuard:
    """
    Dependency that admits a request only if its key matches env_var.

    The expected key is read on every call so rotating it needs no restart.
    """

    def __init__(self, env_var: str = "API_KEY"):
        self.env_var = env_var

    def __call__(self, api_key: Optional[str] = Security(api_key_header)) -> str:
        """
        Returns:
            The accepted key

        Raises:
            ConfigurationError: If env_var is unset (served as 500)
            HTTPException: 401 if the header is missing or does not match
        """
        expected = os.getenv(self.env_var)
        if not expected:
            raise ConfigurationError(f"{self.env_var} not configured on server")

        if not api_key:
            self._reject("Missing x-api-key header")

        if not hmac.compare_digest(api_key.encode(), expected.encode()):
            self._reject("Invalid API key")

        return api_key

    @staticmethod
    def _reject(reason: str):
        logger.warning("api_key_rejected", reason=reason)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=reason,
            headers={"WWW-Authenticate": "APIKey"}
        )


verify_api_key = ApiKeyGuard()
