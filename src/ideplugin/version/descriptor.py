"""Composite platform version parsing.

A platform version may carry its product type as a prefix, e.g.
``IU-2022.1.1``.  ``parse_version`` splits such a string into a
``VersionDescriptor``; strings without a recognisable prefix keep their
text as the version number and take the separately configured type, or
``IC`` (IntelliJ IDEA Community Edition) when none was configured.

Only a whole-string match counts: the prefix must be two or three
uppercase letters immediately followed by a hyphen.  ``LATEST-EAP-SNAPSHOT``
and ``221-EAP-SNAPSHOT`` therefore stay untyped.

Example
-------
::

    >>> parse_version("IU-2022.1.1")
    VersionDescriptor(platform_type='IU', version_number='2022.1.1')
    >>> parse_version("2022.1.1")
    VersionDescriptor(platform_type='IC', version_number='2022.1.1')
"""
from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_PLATFORM_TYPE = "IC"

# Informational only; the set of accepted codes is maintained upstream.
KNOWN_PLATFORM_TYPES: dict[str, str] = {
    "IC": "IntelliJ IDEA Community Edition",
    "IU": "IntelliJ IDEA Ultimate Edition",
    "CL": "CLion",
    "PY": "PyCharm Professional Edition",
    "PC": "PyCharm Community Edition",
    "RD": "Rider",
    "GO": "GoLand",
    "JPS": "JPS-only",
    "GW": "Gateway",
}

_VERSION_TYPE_PATTERN = re.compile(r"([A-Z]{2,3})-(.*)")


@dataclass(frozen=True, slots=True)
class VersionDescriptor:
    """A platform type code paired with a bare version number.

    Parameters
    ----------
    platform_type:
        Product code such as ``"IC"`` or ``"IU"``.
    version_number:
        Version, build number or snapshot name without the type prefix.
    """

    platform_type: str
    version_number: str

    def __str__(self) -> str:
        return f"{self.platform_type}-{self.version_number}"

    @property
    def product_name(self) -> str | None:
        """Return the display name of a known platform type, else ``None``."""
        return KNOWN_PLATFORM_TYPES.get(self.platform_type)


def parse_version(raw: str, declared_type: str | None = None) -> VersionDescriptor:
    """Split ``raw`` into a platform type and a version number.

    Parameters
    ----------
    raw:
        The raw version value, e.g. ``"IU-2022.1.1"`` or ``"221.5080.210"``.
    declared_type:
        Type used when ``raw`` has no type prefix.  Falls back to
        ``DEFAULT_PLATFORM_TYPE`` when ``None`` or empty.

    Returns
    -------
    VersionDescriptor
        Always a value; malformed strings are passed through untouched.
    """
    match = _VERSION_TYPE_PATTERN.fullmatch(raw)
    if match is not None:
        return VersionDescriptor(platform_type=match.group(1), version_number=match.group(2))
    return VersionDescriptor(
        platform_type=declared_type or DEFAULT_PLATFORM_TYPE,
        version_number=raw,
    )
