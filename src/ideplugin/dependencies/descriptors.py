"""Plugin dependency descriptors.

A plugin dependency is identified in exactly one of three ways, each
modelled as a frozen, hashable dataclass so that duplicate declarations
collapse inside a set:

``MarketplacePlugin``
    ``plugin_id`` plus ``version`` and an optional release ``channel``,
    declared as ``"org.intellij.scala:2017.2.638@nightly"``.
``BundledPlugin``
    A plugin shipped with the platform, declared by its bare name, e.g.
    ``"Groovy"``.
``ProjectPlugin``
    A plugin produced by another project of the same build, declared as
    ``"project(':plugin-subproject')"``.

``parse_plugin_notation`` turns an author's declaration into one of
these descriptors.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from ideplugin.errors import InvalidPluginNotationError


@dataclass(frozen=True, slots=True)
class MarketplacePlugin:
    """A plugin fetched from a repository by id and version.

    Parameters
    ----------
    plugin_id:
        The plugin identifier, e.g. ``"org.intellij.plugins.markdown"``.
    version:
        The requested plugin version.
    channel:
        Optional release channel such as ``"nightly"``.
    """

    plugin_id: str
    version: str
    channel: str | None = None

    @property
    def kind(self) -> str:
        return "marketplace"

    def __str__(self) -> str:
        suffix = f"@{self.channel}" if self.channel else ""
        return f"{self.plugin_id}:{self.version}{suffix}"


@dataclass(frozen=True, slots=True)
class BundledPlugin:
    """A plugin bundled with the target platform."""

    name: str

    @property
    def kind(self) -> str:
        return "bundled"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ProjectPlugin:
    """A plugin built by another project in the same build.

    Parameters
    ----------
    path:
        Project path in build notation, e.g. ``":plugin-subproject"``.
    """

    path: str

    @property
    def kind(self) -> str:
        return "project"

    def __str__(self) -> str:
        return f"project('{self.path}')"


PluginDescriptor = Union[MarketplacePlugin, BundledPlugin, ProjectPlugin]

PLUGIN_DESCRIPTOR_TYPES: tuple[type, ...] = (MarketplacePlugin, BundledPlugin, ProjectPlugin)

_PROJECT_PATTERN = re.compile(r"""project\(\s*(['"])(?P<path>[^'"]+)\1\s*\)""")


def parse_plugin_notation(value: str | PluginDescriptor) -> PluginDescriptor:
    """Translate a plugin declaration into a descriptor.

    Parameters
    ----------
    value:
        A descriptor (returned unchanged) or a string in one of the
        forms ``id:version``, ``id:version@channel``, ``bundledName`` or
        ``project(':path')``.

    Returns
    -------
    PluginDescriptor
        The matching descriptor variant.

    Raises
    ------
    InvalidPluginNotationError
        If the value is empty, of an unsupported type, or has an empty
        id, version or channel part.
    """
    if isinstance(value, PLUGIN_DESCRIPTOR_TYPES):
        return value
    if not isinstance(value, str):
        raise InvalidPluginNotationError(value, f"unsupported type {type(value).__name__}")

    notation = value.strip()
    if not notation:
        raise InvalidPluginNotationError(value, "empty declaration")

    project_match = _PROJECT_PATTERN.fullmatch(notation)
    if project_match is not None:
        return ProjectPlugin(path=project_match.group("path"))

    if ":" not in notation:
        if "@" in notation:
            raise InvalidPluginNotationError(value, "a channel requires a version")
        return BundledPlugin(name=notation)

    plugin_id, _, rest = notation.partition(":")
    version, has_channel, channel = rest.partition("@")
    if not plugin_id:
        raise InvalidPluginNotationError(value, "missing plugin id")
    if not version:
        raise InvalidPluginNotationError(value, "missing version")
    if ":" in version:
        raise InvalidPluginNotationError(value, "expected a single ':' separator")
    if has_channel and not channel:
        raise InvalidPluginNotationError(value, "empty channel after '@'")
    return MarketplacePlugin(plugin_id=plugin_id, version=version, channel=channel or None)
