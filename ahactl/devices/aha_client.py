"""
HTTP client for the gateway's home automation (AHA) interface.

Every request is a GET against /webservices/homeautoswitch.lua carrying a
switchcmd, an optional device ain/param and the session id.
"""

from typing import Optional

import httpx

from ahactl.devices.url_builder import URLBuilder
from ahactl.models.config import GatewayConfig
from ahactl.models.device import DeviceList, decode_device_list
from ahactl.utils.logging import get_logger

logger = get_logger(__name__)


SIM_DEVICE_LIST = """<devicelist version="1">
<device identifier="11657 0018736" id="16" functionbitmask="2944" fwversion="04.16" manufacturer="AVM" productname="FRITZ!DECT 200">
<present>1</present><name>Lamp</name>
<switch><state>1</state><mode>manuell</mode><lock>0</lock><devicelock>0</devicelock></switch>
<powermeter><power>0</power><energy>707</energy></powermeter>
<temperature><celsius>215</celsius><offset>0</offset></temperature>
</device>
<device identifier="11657 0018737" id="17" functionbitmask="2944" fwversion="04.16" manufacturer="AVM" productname="FRITZ!DECT 210">
<present>1</present><name>Plug</name>
<switch><state>0</state><mode>auto</mode><lock>0</lock><devicelock>0</devicelock></switch>
<powermeter><power>12500</power><energy>3410</energy></powermeter>
<temperature><celsius>190</celsius><offset>-5</offset></temperature>
</device>
<device identifier="09995 0335100" id="20" functionbitmask="320" fwversion="03.54" manufacturer="AVM" productname="Comet DECT">
<present>1</present><name>Radiator</name>
<temperature><celsius>205</celsius><offset>0</offset></temperature>
<hkr><tist>41</tist><tsoll>42</tsoll><absenk>32</absenk><komfort>42</komfort></hkr>
</device>
</devicelist>
"""

SIM_RESPONSES = {
    "setswitchon": "1\n",
    "setswitchoff": "0\n",
    "setswitchtoggle": "1\n",
}


class AhaClient:
    """
    Gateway HTTP client.

    Features:
    - URL assembly from GatewayConfig (protocol/host/port) and session id
    - Device list fetch and decode
    - Single-exchange command requests, response closed on every path
    - Sim mode (no network traffic, fixed sample devices)

    The underlying httpx.AsyncClient is shared by concurrent requests; use the
    client as an async context manager (or call aclose()) to release it.
    """

    ENDPOINT = "/webservices/homeautoswitch.lua"

    def __init__(
        self,
        config: GatewayConfig,
        sid: str,
        sim_mode: bool = False,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize gateway client.

        Args:
            config: Gateway connection settings
            sid: Valid session id, sent with every request
            sim_mode: If True, don't make real HTTP calls
            http_client: Pre-built httpx client (tests inject a MockTransport)
        """
        self.config = config
        self.sid = sid
        self.sim_mode = sim_mode
        self._http = http_client
        self._owns_http = http_client is None

    async def __aenter__(self) -> "AhaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the httpx client if this instance created it."""
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout_seconds),
                verify=self.config.verify_tls,
                limits=httpx.Limits(
                    max_connections=self.config.max_concurrency,
                    max_keepalive_connections=self.config.max_concurrency,
                ),
            )
        return self._http

    def build_url(
        self,
        switchcmd: str,
        ain: Optional[str] = None,
        param: Optional[str] = None
    ) -> str:
        """Build the request URL for one AHA command."""
        builder = URLBuilder(self.config).path(self.ENDPOINT)
        if ain:
            builder.query("ain", ain)
        builder.query("switchcmd", switchcmd)
        if param is not None:
            builder.query("param", param)
        return builder.query("sid", self.sid).build()

    async def _get(self, url: str) -> str:
        """
        Perform one GET and read the body fully.

        Raises:
            httpx.HTTPStatusError: On non-2xx status
            httpx.TransportError: On connect/read failures and timeouts
        """
        async with self._client().stream("GET", url) as response:
            response.raise_for_status()
            await response.aread()
            return response.text

    async def list_devices(self) -> DeviceList:
        """
        Fetch and decode the device listing.

        Returns:
            DeviceList

        Raises:
            httpx.HTTPError: On transport failure
            DirectoryFetchError: If the body cannot be decoded
        """
        if self.sim_mode:
            logger.info("[SIM] Listing gateway devices")
            return decode_device_list(SIM_DEVICE_LIST)

        body = await self._get(self.build_url("getdevicelistinfos"))
        return decode_device_list(body)

    async def send_command(
        self,
        ain: str,
        switchcmd: str,
        param: Optional[str] = None
    ) -> str:
        """
        Send one command for one device.

        Args:
            ain: Device address, whitespace already removed
            switchcmd: AHA command (e.g. "setswitchon")
            param: Optional command parameter

        Returns:
            Raw response body

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
        """
        if self.sim_mode:
            logger.info("[SIM] Sending gateway command", ain=ain, switchcmd=switchcmd, param=param)
            if param is not None:
                return f"{param}\n"
            return SIM_RESPONSES.get(switchcmd, "")

        return await self._get(self.build_url(switchcmd, ain=ain, param=param))
