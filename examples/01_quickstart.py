#!/usr/bin/env python3
"""Example: Quickstart — ideplugin-config

Minimal working example: load a configuration, inspect the platform
version and repositories, then resolve plugin dependencies once.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install ideplugin-config
"""
from __future__ import annotations

from pathlib import Path

import ideplugin


class PrintingResolver:
    """Pretends to resolve a dependency configuration."""

    def __init__(self, ext: ideplugin.PlatformPluginExtension) -> None:
        self._ext = ext

    def resolve(self, configuration_name: str) -> None:
        print(f"  resolving {configuration_name!r} ...")
        self._ext.declare_plugin_dependencies()


def main() -> None:
    print(f"ideplugin-config version: {ideplugin.__version__}")

    # Step 1: Load the configuration document
    ext = ideplugin.load_extension(Path(__file__).with_name("plugin.yaml"))
    print(f"Project: {ext.project_name}, "
          f"platform={ext.get_version_type()} {ext.get_version_number()}")

    # Step 2: Validate it
    for diag in ideplugin.validate(ext):
        print(f"  {diag}")

    # Step 3: Repositories in lookup order
    for repository in ext.get_plugins_repositories():
        print(f"Repository: {repository}")

    # Step 4: Resolve plugin dependencies; the second call is free
    resolver = PrintingResolver(ext)
    print(f"Unresolved before: {len(ext.get_unresolved_plugin_dependencies())}")
    for descriptor in sorted(ext.get_plugin_dependencies_list(resolver), key=str):
        print(f"  {descriptor.kind}: {descriptor}")
    ext.get_plugin_dependencies_list(resolver)
    print(f"Unresolved after: {len(ext.get_unresolved_plugin_dependencies())}")


if __name__ == "__main__":
    main()
