"""
Device list models and decoder for the gateway's getdevicelistinfos XML.

Example payload:
    <devicelist version="1">
      <device identifier="11657 0018736" id="16" functionbitmask="2944"
              fwversion="04.16" manufacturer="AVM" productname="FRITZ!DECT 200">
        <present>1</present>
        <name>Lamp</name>
        <switch><state>1</state><mode>manuell</mode><lock>0</lock><devicelock>0</devicelock></switch>
        <powermeter><power>0</power><energy>707</energy></powermeter>
        <temperature><celsius>215</celsius><offset>0</offset></temperature>
      </device>
    </devicelist>
"""

import xml.etree.ElementTree as ET
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, Field

from ahactl.errors import DirectoryFetchError

# Special HKR setpoint values
HKR_OFF = 253
HKR_ON = 254


class SwitchState(BaseModel):
    """Switch block of a smart plug."""
    state: str = ""
    mode: str = ""
    lock: str = ""
    devicelock: str = ""


class PowerMeter(BaseModel):
    """Power meter block (power in mW, energy in Wh)."""
    power: str = ""
    energy: str = ""


class Temperature(BaseModel):
    """Temperature sensor block (tenths of a degree Celsius)."""
    celsius: str = ""
    offset: str = ""


class Thermostat(BaseModel):
    """Radiator thermostat (HKR) block, values in half degrees Celsius."""
    tist: str = ""
    tsoll: str = ""
    absenk: str = ""
    komfort: str = ""


class Device(BaseModel):
    """A single device as reported by the gateway."""
    identifier: str
    id: str = ""
    functionbitmask: str = ""
    fwversion: str = ""
    manufacturer: str = ""
    productname: str = ""
    present: bool = False
    name: str = ""
    switch: Optional[SwitchState] = None
    powermeter: Optional[PowerMeter] = None
    temperature: Optional[Temperature] = None
    hkr: Optional[Thermostat] = None

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def ain(self) -> str:
        """Identifier with all whitespace removed, usable as the ain parameter."""
        return "".join(self.identifier.split())

    @property
    def temperature_celsius(self) -> Optional[float]:
        """Measured temperature in Celsius, or None if not reported."""
        if not self.temperature or not self.temperature.celsius:
            return None
        try:
            offset = int(self.temperature.offset or 0)
            return (int(self.temperature.celsius) + offset) / 10
        except ValueError:
            return None

    @property
    def target_celsius(self) -> Optional[float]:
        """
        Thermostat target temperature in Celsius.

        Returns None when there is no thermostat or the target is one of the
        special on/off markers.
        """
        if not self.hkr or not self.hkr.tsoll:
            return None
        try:
            raw = int(self.hkr.tsoll)
        except ValueError:
            return None
        if raw in (HKR_OFF, HKR_ON):
            return None
        return raw / 2


class DeviceList(BaseModel):
    """Full device listing."""
    version: str = ""
    devices: List[Device] = Field(default_factory=list)


BlockT = TypeVar("BlockT", bound=BaseModel)


def _text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _block(element: ET.Element, tag: str, model: Type[BlockT]) -> Optional[BlockT]:
    child = element.find(tag)
    if child is None:
        return None
    return model(**{field: _text(child, field) for field in model.model_fields})


def _decode_device(element: ET.Element) -> Device:
    return Device(
        identifier=element.get("identifier", ""),
        id=element.get("id", ""),
        functionbitmask=element.get("functionbitmask", ""),
        fwversion=element.get("fwversion", ""),
        manufacturer=element.get("manufacturer", ""),
        productname=element.get("productname", ""),
        present=_text(element, "present") == "1",
        name=_text(element, "name"),
        switch=_block(element, "switch", SwitchState),
        powermeter=_block(element, "powermeter", PowerMeter),
        temperature=_block(element, "temperature", Temperature),
        hkr=_block(element, "hkr", Thermostat),
    )


def decode_device_list(body: str) -> DeviceList:
    """
    Decode a getdevicelistinfos response body.

    Args:
        body: Raw XML text

    Returns:
        DeviceList with one Device per <device> element

    Raises:
        DirectoryFetchError: If the body is not a well-formed device list
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise DirectoryFetchError(str(e)) from e

    if root.tag != "devicelist":
        raise DirectoryFetchError(f"unexpected root element <{root.tag}>")

    return DeviceList(
        version=root.get("version", ""),
        devices=[_decode_device(element) for element in root.findall("device")],
    )
