"""
Pydantic models for gateway configuration.
Matches the structure stored in config.json / the config_store table.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field


class GatewayConfig(BaseModel):
    """Connection settings for the home-automation gateway."""
    protocol: Literal["http", "https"] = "https"
    host: str = "fritz.box"
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    timeout_seconds: float = Field(default=10.0, gt=0)
    verify_tls: bool = True
    # None means one concurrent request per targeted device
    max_concurrency: Optional[int] = Field(default=None, ge=1)


class AppConfig(BaseModel):
    """Top-level application configuration."""
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)

    class Config:
        """Pydantic config."""
        # Allow extra fields for forward compatibility
        extra = "allow"
