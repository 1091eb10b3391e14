"""
Device commands and the per-device unit of work that executes them.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Awaitable, Callable, ClassVar, Optional

from ahactl.devices.aha_client import AhaClient
from ahactl.errors import TargetExecutionError


@dataclass(frozen=True)
class Command:
    """Base for all device commands."""
    switchcmd: ClassVar[str] = ""
    label: ClassVar[str] = ""

    def param(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class SwitchOn(Command):
    switchcmd: ClassVar[str] = "setswitchon"
    label: ClassVar[str] = "switch-on"


@dataclass(frozen=True)
class SwitchOff(Command):
    switchcmd: ClassVar[str] = "setswitchoff"
    label: ClassVar[str] = "switch-off"


@dataclass(frozen=True)
class Toggle(Command):
    switchcmd: ClassVar[str] = "setswitchtoggle"
    label: ClassVar[str] = "toggle"


@dataclass(frozen=True)
class SetTemperature(Command):
    """Set a thermostat target; value in degrees Celsius."""
    switchcmd: ClassVar[str] = "sethkrtsoll"
    label: ClassVar[str] = "set-temperature"

    value: float

    def __post_init__(self):
        # Fail on construction, before any device list is fetched
        to_half_degrees(self.value)

    def param(self) -> Optional[str]:
        return str(to_half_degrees(self.value))


def to_half_degrees(celsius: float) -> int:
    """
    Convert Celsius to the gateway's half-degree units.

    Rounds half away from zero: 21.25 -> 43, -0.25 -> -1.

    Raises:
        ValueError: If the doubled value is NaN or infinite
    """
    doubled = 2 * celsius
    if not math.isfinite(doubled):
        raise ValueError(f"temperature must be a finite number, got {celsius}")

    with localcontext() as ctx:
        # Enough digits for any finite float
        ctx.prec = 400
        return int(Decimal(doubled).quantize(Decimal(1), rounding=ROUND_HALF_UP))


Work = Callable[[], Awaitable[str]]


def build_work(client: AhaClient, ain: str, command: Command) -> Work:
    """Bind one command to one device address; the result performs one exchange."""
    param = command.param()

    async def work() -> str:
        return await client.send_command(ain, command.switchcmd, param)

    return work


@dataclass
class Outcome:
    """Result of running one target."""
    name: str
    message: str = ""
    error: Optional[TargetExecutionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CommandTarget:
    """A device name paired with its unit of work."""
    name: str
    work: Work

    async def execute(self) -> Outcome:
        """
        Run the work once.

        Any failure becomes a failed Outcome instead of propagating, so
        sibling targets always run to completion and every error is folded.
        """
        try:
            message = await self.work()
        except Exception as e:
            return Outcome(name=self.name, error=TargetExecutionError(self.name, e))
        return Outcome(name=self.name, message=message)
