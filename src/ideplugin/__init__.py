"""ideplugin-config — configuration surface for platform plugin builds.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import ideplugin

    # Split a composite platform version
    descriptor = ideplugin.parse_version("IU-2022.1.1")
    descriptor.platform_type      # "IU"

    # Load a configuration document
    ext = ideplugin.load_extension("plugin.yaml")
    ext.get_plugins_repositories()

    # Validate it
    diagnostics = ideplugin.validate(ext)

    ideplugin.__version__
    '0.1.0'
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ideplugin.errors import (
    ConfigFileError,
    ConfigurationError,
    InvalidPluginNotationError,
    MissingPropertyError,
)
from ideplugin.extension import PlatformPluginExtension

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from ideplugin.validator.diagnostics import Diagnostic
    from ideplugin.version.descriptor import VersionDescriptor


def parse_version(raw: str, declared_type: str | None = None) -> "VersionDescriptor":
    """Split a composite platform version into type and version number.

    Parameters
    ----------
    raw:
        Version such as ``"IU-2022.1.1"`` or ``"2022.1.1"``.
    declared_type:
        Type used when ``raw`` carries no prefix; ``"IC"`` if omitted.

    Returns
    -------
    VersionDescriptor
        The parsed descriptor.  Never raises.
    """
    from ideplugin.version.descriptor import parse_version as _parse_version

    return _parse_version(raw, declared_type)


def load_extension(path: str | Path) -> PlatformPluginExtension:
    """Load a ``PlatformPluginExtension`` from a YAML or JSON file.

    Raises
    ------
    ideplugin.errors.ConfigFileError
        If the file is unreadable, malformed, or has unknown settings.
    """
    from ideplugin.config.loader import load_extension as _load_extension

    return _load_extension(path)


def validate(ext: PlatformPluginExtension, strict: bool = False) -> list["Diagnostic"]:
    """Validate a configuration against all built-in rules.

    Parameters
    ----------
    ext:
        The configuration to check.
    strict:
        When ``True``, warnings are promoted to errors.
    """
    from ideplugin.validator.validator import validate_extension

    return validate_extension(ext, strict=strict)


__all__ = [
    "__version__",
    "ConfigFileError",
    "ConfigurationError",
    "InvalidPluginNotationError",
    "MissingPropertyError",
    "PlatformPluginExtension",
    "load_extension",
    "parse_version",
    "validate",
]
