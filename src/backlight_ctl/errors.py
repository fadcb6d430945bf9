from __future__ import annotations


class BrightnessError(Exception):
    """Base class for failures while touching brightness controls."""


class ControlNotFoundError(BrightnessError):
    pass


class DiscoveryError(BrightnessError):
    pass


class ControlReadError(BrightnessError):
    pass


class ControlWriteError(BrightnessError):
    pass


class InvariantViolation(BrightnessError):
    """sysfs returned something the kernel should never produce."""
