"""Exception types for ideplugin-config.

Every error raised by the configuration surface derives from
``ConfigurationError`` so that build front-ends can catch them in one
place. Failures raised by an external resolution trigger are never
wrapped: they propagate to the caller unchanged.
"""
from __future__ import annotations

from pathlib import Path


class ConfigurationError(Exception):
    """Base class for all ideplugin configuration errors."""


class MissingPropertyError(ConfigurationError, ValueError):
    """Raised when a required property is read before it was assigned."""

    def __init__(self, property_name: str) -> None:
        self.property_name = property_name
        super().__init__(
            f"Required configuration value {property_name!r} is absent. "
            "Assign it before it is read."
        )


class InvalidPluginNotationError(ConfigurationError, ValueError):
    """Raised when a plugin declaration cannot be turned into a descriptor."""

    def __init__(self, notation: object, reason: str) -> None:
        self.notation = notation
        self.reason = reason
        super().__init__(f"Invalid plugin notation {notation!r}: {reason}")


class ConfigFileError(ConfigurationError):
    """Raised when a configuration document cannot be read or understood."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")
