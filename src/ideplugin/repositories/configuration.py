"""Repository configuration and the effective-repository resolver.

``PluginsRepositoryConfiguration`` collects explicitly registered
repository sources in registration order.  ``effective_repositories``
is the read path used by the downloader: when nothing was registered it
registers the marketplace as a side effect, so every later read sees
the same single default entry.

Example
-------
::

    config = PluginsRepositoryConfiguration()
    config.maven("https://repo.example.com/plugins")
    effective_repositories(config)   # [MavenRepository(...)]

    empty = PluginsRepositoryConfiguration()
    effective_repositories(empty)    # [MarketplaceRepository(...)]
    effective_repositories(empty)    # still one entry
"""
from __future__ import annotations

import logging
import threading
from typing import Any

from ideplugin.repositories.sources import (
    MARKETPLACE_URL,
    CustomPluginRepository,
    MarketplaceRepository,
    MavenRepository,
    RepositorySource,
)

logger = logging.getLogger(__name__)


class PluginsRepositoryConfiguration:
    """Ordered collection of plugin repository sources.

    Registration order is lookup precedence downstream.  Nothing stops
    registration after the list has been read, but callers are expected
    to finish registering before resolution starts.
    """

    def __init__(self) -> None:
        self._repositories: list[RepositorySource] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def marketplace(self, url: str = MARKETPLACE_URL) -> MarketplaceRepository:
        """Register the public plugin marketplace."""
        return self._add(MarketplaceRepository(url=url))

    def maven(self, url: str, credentials: dict[str, Any] | None = None) -> MavenRepository:
        """Register a custom Maven repository."""
        return self._add(MavenRepository(url=url, credentials=credentials))

    def custom(self, plugins_xml_url: str) -> CustomPluginRepository:
        """Register a custom repository backed by a plugins XML listing."""
        return self._add(CustomPluginRepository(plugins_xml_url=plugins_xml_url))

    def _add(self, repository):
        with self._lock:
            self._repositories.append(repository)
        logger.debug("Registered plugin repository %s", repository)
        return repository

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_repositories(self) -> list[RepositorySource]:
        """Return the explicitly registered sources, in order."""
        with self._lock:
            return list(self._repositories)

    def ensure_default(self) -> list[RepositorySource]:
        """Register the marketplace if the list is empty, then return it.

        The emptiness check and the insert happen under one lock, so
        concurrent first readers add the default exactly once.
        """
        with self._lock:
            if not self._repositories:
                self._repositories.append(MarketplaceRepository())
                logger.debug("No plugin repositories configured; using the marketplace")
            return list(self._repositories)

    def __len__(self) -> int:
        with self._lock:
            return len(self._repositories)

    def __repr__(self) -> str:
        return f"PluginsRepositoryConfiguration(repositories={self.get_repositories()!r})"


def effective_repositories(configuration: PluginsRepositoryConfiguration) -> list[RepositorySource]:
    """Return the repositories the downloader should search, in order.

    Parameters
    ----------
    configuration:
        The repository configuration to read and, if empty, populate.

    Returns
    -------
    list[RepositorySource]
        The explicitly registered sources, or a single marketplace entry
        when none were registered.  Never raises.
    """
    repositories = configuration.get_repositories()
    if repositories:
        return repositories
    return configuration.ensure_default()
