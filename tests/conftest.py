"""Shared test fixtures for ideplugin-config.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from ideplugin.extension import PlatformPluginExtension


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "ideplugin"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def extension() -> PlatformPluginExtension:
    """Return a fresh extension with an empty environment."""
    return PlatformPluginExtension(project_name="demo-plugin", build_dir="build", environ={})


@pytest.fixture()
def config_file(tmp_path: Path):
    """Return a factory writing a configuration document into ``tmp_path``."""

    def _write(text: str, name: str = "plugin.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
