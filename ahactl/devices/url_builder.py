"""
Fluent builder for gateway request URLs.
"""

from typing import List, Tuple

import httpx

from ahactl.models.config import GatewayConfig


class URLBuilder:
    """
    Assembles a URL from the gateway base, path segments and query parameters.

    Example:
        URLBuilder(config).path("/webservices", "homeautoswitch.lua") \\
            .query("switchcmd", "getdevicelistinfos").query("sid", sid).build()
    """

    def __init__(self, config: GatewayConfig):
        self.config = config
        self._segments: List[str] = []
        self._params: List[Tuple[str, str]] = []

    def path(self, *segments: str) -> "URLBuilder":
        """Append path segments; slashes between segments are normalised."""
        for segment in segments:
            self._segments.extend(part for part in segment.split("/") if part)
        return self

    def query(self, key: str, value: str) -> "URLBuilder":
        """Append a query parameter (values are percent-encoded on build)."""
        self._params.append((key, str(value)))
        return self

    def build(self) -> str:
        netloc = self.config.host
        if self.config.port:
            netloc = f"{netloc}:{self.config.port}"
        base = f"{self.config.protocol}://{netloc}/" + "/".join(self._segments)
        return str(httpx.URL(base, params=self._params))
