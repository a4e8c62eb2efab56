"""Plugin repository sources and the effective-repository resolver."""
from __future__ import annotations

from ideplugin.repositories.configuration import (
    PluginsRepositoryConfiguration,
    effective_repositories,
)
from ideplugin.repositories.sources import (
    MARKETPLACE_URL,
    CustomPluginRepository,
    MarketplaceRepository,
    MavenRepository,
    RepositorySource,
)

__all__ = [
    "MARKETPLACE_URL",
    "CustomPluginRepository",
    "MarketplaceRepository",
    "MavenRepository",
    "PluginsRepositoryConfiguration",
    "RepositorySource",
    "effective_repositories",
]
