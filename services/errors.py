"""Exception hierarchy raised by the sensor engine and its collaborators."""

from __future__ import annotations


class SensorError(Exception):
    """Base class for every failure surfaced to the driver."""


class InvalidArgumentError(SensorError, ValueError):
    """Bad configuration: blank identity or an unusable temperature range."""


class NullArgumentError(SensorError, TypeError):
    """A required reading argument was ``None``."""


class InvalidStateError(SensorError, RuntimeError):
    """The operation is not allowed in the engine's current lifecycle state."""


class ConfigurationError(SensorError):
    """The configuration file could not be read or failed validation."""


class ConfigSecurityError(ConfigurationError):
    """The configuration path was rejected before touching the filesystem."""
