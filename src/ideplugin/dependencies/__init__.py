"""Plugin dependency descriptors and the gated dependency registry."""
from __future__ import annotations

from ideplugin.dependencies.descriptors import (
    BundledPlugin,
    MarketplacePlugin,
    PluginDescriptor,
    ProjectPlugin,
    parse_plugin_notation,
)
from ideplugin.dependencies.registry import PluginDependencyRegistry, ResolutionTrigger

__all__ = [
    "BundledPlugin",
    "MarketplacePlugin",
    "PluginDependencyRegistry",
    "PluginDescriptor",
    "ProjectPlugin",
    "ResolutionTrigger",
    "parse_plugin_notation",
]
