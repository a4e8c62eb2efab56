"""The plugin build configuration object.

``PlatformPluginExtension`` holds every setting an author may declare
for a platform plugin build, each as a ``Property`` with its documented
convention, plus the three pieces of real logic around them:

* ``get_version_type`` / ``get_version_number`` split the composite
  ``version`` setting;
* ``get_plugins_repositories`` returns the effective repository list,
  defaulting to the marketplace;
* ``get_unresolved_plugin_dependencies`` and
  ``get_plugin_dependencies_list`` expose the gated dependency registry.

Example
-------
::

    ext = PlatformPluginExtension(project_name="my-plugin", build_dir="build")
    ext.version.set("IU-2022.1.1")
    ext.plugins.add_all(["Groovy", "org.intellij.plugins.markdown:8.5.0"])
    ext.get_version_type()       # "IU"
    ext.declare_plugin_dependencies()
    ext.get_unresolved_plugin_dependencies()
"""
from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol

from ideplugin.dependencies import (
    PluginDependencyRegistry,
    PluginDescriptor,
    parse_plugin_notation,
)
from ideplugin.properties import ListProperty, Property
from ideplugin.repositories import (
    PluginsRepositoryConfiguration,
    RepositorySource,
    effective_repositories,
)
from ideplugin.version import DEFAULT_PLATFORM_TYPE, VersionDescriptor, parse_version

logger = logging.getLogger(__name__)

PLUGINS_CONFIGURATION_NAME = "ideaPlugins"

INTELLIJ_REPOSITORY_URL = "https://cache-redirector.jetbrains.com/www.jetbrains.com/intellij-repository"

SANDBOX_DIR_NAME = "idea-sandbox"


class DependencyResolver(Protocol):
    """The build-graph service that performs real dependency resolution."""

    def resolve(self, configuration_name: str) -> None: ...


class PlatformPluginExtension:
    """Configuration options for building a platform plugin.

    Parameters
    ----------
    project_name:
        Name of the project being built; the default ``plugin_name``.
    build_dir:
        Build output directory; the sandbox defaults to a child of it.
    environ:
        Environment used for environment-derived defaults.  Defaults to
        ``os.environ``.
    """

    def __init__(
        self,
        project_name: str,
        build_dir: str | Path = "build",
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.project_name = project_name
        self.build_dir = Path(build_dir)
        self._environ = os.environ if environ is None else environ

        # Bundled names, ``id:version[@channel]`` strings or project references.
        self.plugins: ListProperty[str | PluginDescriptor] = ListProperty("plugins")
        self.local_path: Property[str] = Property("local_path")
        self.local_sources_path: Property[str] = Property("local_sources_path")
        self.version: Property[str] = Property("version")
        self.type: Property[str] = Property("type")
        self.plugin_name: Property[str] = Property("plugin_name", lambda: self.project_name)
        self.update_since_until_build: Property[bool] = Property("update_since_until_build", True)
        self.same_since_until_build: Property[bool] = Property("same_since_until_build", False)
        self.instrument_code: Property[bool] = Property("instrument_code", True)
        self.sandbox_dir: Property[str] = Property(
            "sandbox_dir", lambda: str(self.build_dir / SANDBOX_DIR_NAME)
        )
        self.intellij_repository: Property[str] = Property("intellij_repository", INTELLIJ_REPOSITORY_URL)
        self.plugins_repositories = PluginsRepositoryConfiguration()
        self.jre_repository: Property[str] = Property("jre_repository")
        self.idea_dependency_cache_path: Property[str] = Property("idea_dependency_cache_path")
        self.download_sources: Property[bool] = Property(
            "download_sources", lambda: "CI" not in self._environ
        )
        self.configure_default_dependencies: Property[bool] = Property(
            "configure_default_dependencies", True
        )
        self.extra_dependencies: ListProperty[str] = ListProperty("extra_dependencies")
        self.plugin_dependencies = PluginDependencyRegistry()

    # ------------------------------------------------------------------
    # Version
    # ------------------------------------------------------------------

    def get_version(self) -> VersionDescriptor:
        """Return the parsed ``version`` setting.

        Raises
        ------
        MissingPropertyError
            If ``version`` was never set.
        """
        return parse_version(self.version.get(), self.type.get_or_else(DEFAULT_PLATFORM_TYPE))

    def get_version_number(self) -> str:
        """Return the version without its platform type prefix."""
        return self.get_version().version_number

    def get_version_type(self) -> str:
        """Return the platform type code, e.g. ``"IC"``."""
        return self.get_version().platform_type

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------

    def get_plugins_repositories(self) -> list[RepositorySource]:
        """Return the repositories to search for plugins, in order."""
        return effective_repositories(self.plugins_repositories)

    def configure_plugins_repositories(
        self, block: Callable[[PluginsRepositoryConfiguration], object]
    ) -> None:
        """Run ``block`` against the repository configuration.

        Example
        -------
        ::

            ext.configure_plugins_repositories(lambda repos: (
                repos.marketplace(),
                repos.maven("https://repo.example.com/plugins"),
            ))
        """
        block(self.plugins_repositories)

    # ------------------------------------------------------------------
    # Plugin dependencies
    # ------------------------------------------------------------------

    def add_plugin_dependency(self, descriptor: PluginDescriptor) -> None:
        """Register a single descriptor with the dependency registry."""
        self.plugin_dependencies.register(descriptor)

    def declare_plugin_dependencies(self) -> list[PluginDescriptor]:
        """Translate the ``plugins`` setting into registered descriptors.

        Returns
        -------
        list[PluginDescriptor]
            The descriptors in declaration order.

        Raises
        ------
        InvalidPluginNotationError
            If any declaration is malformed; nothing is registered then.
        """
        descriptors = [parse_plugin_notation(value) for value in self.plugins.get()]
        self.plugin_dependencies.register_all(descriptors)
        logger.debug("Declared %d plugin dependencies for %r", len(descriptors), self.project_name)
        return descriptors

    def get_unresolved_plugin_dependencies(self) -> set[PluginDescriptor]:
        """Return the declared descriptors, or an empty set once resolved."""
        return self.plugin_dependencies.unresolved_view()

    def get_plugin_dependencies_list(self, resolver: DependencyResolver) -> set[PluginDescriptor]:
        """Return the resolved plugin dependencies.

        The first call asks ``resolver`` to resolve the plugin dependency
        configuration; later calls return the registered descriptors
        without touching the resolver again.
        """
        return self.plugin_dependencies.resolved_view(
            lambda: resolver.resolve(PLUGINS_CONFIGURATION_NAME)
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def effective_settings(self) -> dict[str, object]:
        """Return the effective value of every plain setting.

        Absent optional settings are reported as ``None``; the required
        ``version`` is reported as ``None`` too rather than raising.  When a
        version is set, ``type`` reports the effective platform type, taken
        from the version prefix or the ``IC`` default.
        """
        settings: dict[str, object] = {}
        for attribute, value in vars(self).items():
            if isinstance(value, Property):
                settings[attribute] = value.or_none()
            elif isinstance(value, ListProperty):
                settings[attribute] = [str(item) for item in value.get()]
        if self.version.is_present:
            settings["type"] = self.get_version_type()
        return settings

    def __repr__(self) -> str:
        return (
            f"PlatformPluginExtension(project_name={self.project_name!r}, "
            f"version={self.version.or_none()!r})"
        )
