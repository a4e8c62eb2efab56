"""Plugin repository source variants.

A repository source tells the downstream downloader where plugin
archives may be fetched from.  The set of variants is closed:

``MarketplaceRepository``
    The Maven mirror of the public plugin marketplace.
``MavenRepository``
    A custom Maven repository, optionally with opaque credentials that
    are handed to the downloader untouched.
``CustomPluginRepository``
    A custom repository described by an ``updatePlugins.xml`` listing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

MARKETPLACE_URL = "https://cache-redirector.jetbrains.com/plugins.jetbrains.com/maven"


@dataclass(frozen=True, slots=True)
class MarketplaceRepository:
    """The public plugin marketplace."""

    url: str = MARKETPLACE_URL

    @property
    def kind(self) -> str:
        return "marketplace"

    def __str__(self) -> str:
        return f"marketplace({self.url})"


@dataclass(frozen=True, slots=True)
class MavenRepository:
    """A custom Maven repository hosting plugin artifacts.

    Parameters
    ----------
    url:
        Repository base URL.
    credentials:
        Opaque credential mapping forwarded to the downloader.  Excluded
        from equality and ``repr`` so secrets never end up in logs.
    """

    url: str
    credentials: dict[str, Any] | None = field(default=None, compare=False, repr=False, hash=False)

    @property
    def kind(self) -> str:
        return "maven"

    def __str__(self) -> str:
        return f"maven({self.url})"


@dataclass(frozen=True, slots=True)
class CustomPluginRepository:
    """A repository described by a plugins XML listing."""

    plugins_xml_url: str

    @property
    def kind(self) -> str:
        return "custom"

    @property
    def url(self) -> str:
        return self.plugins_xml_url

    def __str__(self) -> str:
        return f"custom({self.plugins_xml_url})"


RepositorySource = Union[MarketplaceRepository, MavenRepository, CustomPluginRepository]
