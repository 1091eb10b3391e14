"""
Exception hierarchy for gateway interaction.

Directory and unknown-device errors abort a dispatch before any command is
sent. Per-device execution errors are collected and raised together as one
AggregateError once every target has finished.
"""

from typing import Iterable, List


class GatewayError(Exception):
    """Base class for all errors raised while talking to the gateway."""


class ConfigurationError(GatewayError):
    """Gateway configuration or session identifier is missing or invalid."""


class DirectoryFetchError(GatewayError):
    """Device list could not be fetched or decoded."""


class UnknownDeviceError(GatewayError):
    """A requested device name has no address in the device list."""

    def __init__(self, name: str, available: Iterable[str]):
        self.name = name
        self.available = sorted(available)
        quoted = ", ".join(f"'{known}'" for known in self.available)
        super().__init__(
            f"No device found with name '{name}'. Available devices are {quoted}"
        )


class TargetExecutionError(GatewayError):
    """
    A single device command failed.

    The wording is shared by every command kind (switch, toggle, temperature).
    """

    def __init__(self, device: str, cause: Exception):
        self.device = device
        self.cause = cause
        super().__init__(f"error toggling device '{device}': {describe(cause)}")


class AggregateError(GatewayError):
    """One or more devices in a batch failed."""

    PREFIX = "Not all devices could be processed! Nested errors are: "

    def __init__(self, errors: List[TargetExecutionError]):
        self.errors = list(errors)
        super().__init__(self.PREFIX + "; ".join(str(e) for e in self.errors))

    @property
    def failed_devices(self) -> List[str]:
        return [e.device for e in self.errors]


def describe(error: Exception) -> str:
    """Message of an exception, falling back to its type for blank messages."""
    return str(error) or type(error).__name__
