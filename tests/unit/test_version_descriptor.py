"""Unit tests for ideplugin.version: VersionDescriptor and parse_version."""
from __future__ import annotations

import pytest

from ideplugin.version import (
    DEFAULT_PLATFORM_TYPE,
    KNOWN_PLATFORM_TYPES,
    VersionDescriptor,
    parse_version,
)


# ===========================================================================
# Typed versions
# ===========================================================================


class TestTypedVersions:
    @pytest.mark.parametrize(
        ("raw", "platform_type", "number"),
        [
            ("IU-2022.1.1", "IU", "2022.1.1"),
            ("IC-221.5080.210", "IC", "221.5080.210"),
            ("JPS-2022.1", "JPS", "2022.1"),
            ("CL-221-EAP-SNAPSHOT", "CL", "221-EAP-SNAPSHOT"),
            ("AB-123", "AB", "123"),
        ],
    )
    def test_prefix_and_remainder(self, raw: str, platform_type: str, number: str) -> None:
        assert parse_version(raw) == VersionDescriptor(platform_type, number)

    def test_prefix_wins_over_declared_type(self) -> None:
        assert parse_version("IU-2022.1.1", "PY").platform_type == "IU"

    def test_empty_remainder_is_kept(self) -> None:
        assert parse_version("IU-") == VersionDescriptor("IU", "")


# ===========================================================================
# Untyped versions
# ===========================================================================


class TestUntypedVersions:
    def test_default_type_is_community(self) -> None:
        assert parse_version("2022.1.1") == VersionDescriptor("IC", "2022.1.1")
        assert DEFAULT_PLATFORM_TYPE == "IC"

    def test_declared_type_is_used(self) -> None:
        assert parse_version("2022.1.1", "PY") == VersionDescriptor("PY", "2022.1.1")

    def test_empty_declared_type_falls_back(self) -> None:
        assert parse_version("2022.1.1", "").platform_type == "IC"

    @pytest.mark.parametrize(
        "raw",
        [
            "LATEST-EAP-SNAPSHOT",
            "221-EAP-SNAPSHOT",
            "iu-2022.1.1",
            "I-2022.1.1",
            "IDEA-2022.1.1",
            "Iu-2022.1.1",
            "",
        ],
    )
    def test_unmatched_strings_pass_through(self, raw: str) -> None:
        descriptor = parse_version(raw, "GO")
        assert descriptor.platform_type == "GO"
        assert descriptor.version_number == raw


# ===========================================================================
# VersionDescriptor
# ===========================================================================


class TestVersionDescriptor:
    def test_frozen(self) -> None:
        descriptor = VersionDescriptor("IC", "2022.1")
        with pytest.raises((AttributeError, TypeError)):
            descriptor.platform_type = "IU"  # type: ignore[misc]

    def test_str(self) -> None:
        assert str(VersionDescriptor("IU", "2022.1.1")) == "IU-2022.1.1"

    def test_product_name_known(self) -> None:
        assert VersionDescriptor("RD", "2022.1").product_name == "Rider"

    def test_product_name_unknown(self) -> None:
        assert VersionDescriptor("ZZ", "1").product_name is None

    def test_known_types_include_documented_codes(self) -> None:
        for code in ("IC", "IU", "CL", "PY", "PC", "RD", "GO", "JPS", "GW"):
            assert code in KNOWN_PLATFORM_TYPES
