"""Configuration document loading.

Exports ``load_extension`` and the lower-level helpers it is built on.
"""
from __future__ import annotations

from ideplugin.config.loader import (
    KNOWN_KEYS,
    extension_from_mapping,
    load_extension,
    read_document,
)

__all__ = [
    "KNOWN_KEYS",
    "extension_from_mapping",
    "load_extension",
    "read_document",
]
