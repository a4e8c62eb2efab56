"""Load a ``PlatformPluginExtension`` from a YAML or JSON document.

The document is a flat mapping whose keys mirror the extension's
property names.  Repositories are given as an ordered list of
single-key mappings.

Example document
----------------
.. code-block:: yaml

    project_name: markdown-tools
    version: IU-2022.1.1
    plugins:
      - Groovy
      - org.intellij.plugins.markdown:8.5.0
      - "project(':shared')"
    instrument_code: false
    repositories:
      - maven: https://repo.example.com/plugins
      - custom: https://example.com/updatePlugins.xml
      - marketplace: {}

Files ending in ``.json`` are parsed as JSON; everything else as YAML.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from ideplugin.errors import ConfigFileError
from ideplugin.extension import PlatformPluginExtension
from ideplugin.properties import ListProperty

logger = logging.getLogger(__name__)

_STRING_KEYS = frozenset(
    {
        "local_path",
        "local_sources_path",
        "version",
        "type",
        "plugin_name",
        "sandbox_dir",
        "intellij_repository",
        "jre_repository",
        "idea_dependency_cache_path",
    }
)

_BOOLEAN_KEYS = frozenset(
    {
        "update_since_until_build",
        "same_since_until_build",
        "instrument_code",
        "download_sources",
        "configure_default_dependencies",
    }
)

_LIST_KEYS = frozenset({"plugins", "extra_dependencies"})

_STRUCTURAL_KEYS = frozenset({"project_name", "build_dir", "repositories"})

KNOWN_KEYS = _STRING_KEYS | _BOOLEAN_KEYS | _LIST_KEYS | _STRUCTURAL_KEYS


def read_document(path: str | Path) -> dict[str, Any]:
    """Read and decode a configuration document.

    Raises
    ------
    ConfigFileError
        If the file cannot be read, cannot be decoded, or is not a mapping.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigFileError(file_path, f"cannot read file ({exc.strerror or exc})") from exc

    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigFileError(file_path, f"malformed document: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigFileError(file_path, "top level must be a mapping")
    return data


def extension_from_mapping(
    data: Mapping[str, Any],
    source: str | Path = "<mapping>",
    environ: Mapping[str, str] | None = None,
) -> PlatformPluginExtension:
    """Build an extension from an already-decoded mapping.

    Parameters
    ----------
    data:
        Settings keyed by property name.
    source:
        Origin used in error messages.
    environ:
        Environment forwarded to the extension.

    Raises
    ------
    ConfigFileError
        On unknown keys or values of the wrong type.
    """
    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        raise ConfigFileError(source, f"unknown setting(s): {', '.join(unknown)}")

    project_name = data.get("project_name") or Path(source).resolve().parent.name
    extension = PlatformPluginExtension(
        project_name=str(project_name),
        build_dir=_build_dir(data.get("build_dir"), source),
        environ=environ,
    )

    for key, value in data.items():
        if key in _STRUCTURAL_KEYS:
            continue
        target = getattr(extension, key)
        if key in _LIST_KEYS:
            _set_list(target, value, key, source)
        elif key in _BOOLEAN_KEYS:
            if not isinstance(value, bool):
                raise ConfigFileError(source, f"{key!r} must be a boolean, got {value!r}")
            target.set(value)
        else:
            if value is not None and not isinstance(value, str):
                raise ConfigFileError(
                    source, f"{key!r} must be a string, got {value!r}; quote the value"
                )
            target.set(value)

    _apply_repositories(extension, data.get("repositories") or [], source)
    logger.debug("Loaded configuration for %r from %s", extension.project_name, source)
    return extension


def load_extension(path: str | Path, environ: Mapping[str, str] | None = None) -> PlatformPluginExtension:
    """Read ``path`` and build a ``PlatformPluginExtension`` from it."""
    return extension_from_mapping(read_document(path), source=path, environ=environ)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _set_list(target: ListProperty[Any], value: Any, key: str, source: str | Path) -> None:
    if value is None:
        target.set(None)
        return
    if not isinstance(value, list):
        raise ConfigFileError(source, f"{key!r} must be a list, got {value!r}")
    if not all(isinstance(item, str) for item in value):
        raise ConfigFileError(source, f"{key!r} entries must be strings")
    target.set(value)


def _apply_repositories(extension: PlatformPluginExtension, entries: Any, source: str | Path) -> None:
    if not isinstance(entries, list):
        raise ConfigFileError(source, "'repositories' must be a list")
    repositories = extension.plugins_repositories
    for index, entry in enumerate(entries):
        if isinstance(entry, str) and entry == "marketplace":
            repositories.marketplace()
            continue
        if not isinstance(entry, dict) or len(entry) != 1:
            raise ConfigFileError(source, f"repositories[{index}] must be a single-key mapping")
        (kind, options), = entry.items()
        if kind == "marketplace":
            if options:
                repositories.marketplace(url=_option_url(options, index, source))
            else:
                repositories.marketplace()
        elif kind == "maven":
            credentials = options.get("credentials") if isinstance(options, dict) else None
            repositories.maven(_option_url(options, index, source), credentials=credentials)
        elif kind == "custom":
            repositories.custom(_option_url(options, index, source))
        else:
            raise ConfigFileError(source, f"repositories[{index}]: unknown repository kind {kind!r}")


def _option_url(options: Any, index: int, source: str | Path) -> str:
    if isinstance(options, str) and options:
        return options
    if isinstance(options, dict) and isinstance(options.get("url"), str) and options["url"]:
        return options["url"]
    raise ConfigFileError(source, f"repositories[{index}] requires a url")


def _build_dir(value: Any, source: str | Path) -> str:
    if value is None:
        return "build"
    if not isinstance(value, str) or not value:
        raise ConfigFileError(source, f"'build_dir' must be a non-empty string, got {value!r}")
    return value
