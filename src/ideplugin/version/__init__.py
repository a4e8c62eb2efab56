"""Platform version parsing.

Exports ``VersionDescriptor``, the ``parse_version`` function, and the
table of known platform type codes.
"""
from __future__ import annotations

from ideplugin.version.descriptor import (
    DEFAULT_PLATFORM_TYPE,
    KNOWN_PLATFORM_TYPES,
    VersionDescriptor,
    parse_version,
)

__all__ = [
    "DEFAULT_PLATFORM_TYPE",
    "KNOWN_PLATFORM_TYPES",
    "VersionDescriptor",
    "parse_version",
]
