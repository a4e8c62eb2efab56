"""Individual validation rules for plugin build configurations.

Each rule is a callable that accepts a ``PlatformPluginExtension`` and
returns a list of ``Diagnostic`` objects.  Rules are composed into the
``Validator`` class which runs them all and aggregates results.

Rule codes use the ``CFG`` prefix followed by a three-digit number:

    CFG001  Neither version nor local_path is set
    CFG002  Both version and local_path are set
    CFG003  Platform type is not a known code
    CFG004  same_since_until_build has no effect
    CFG005  Malformed plugin declaration

No rule reads a required property in a way that can raise; rules report
absent values instead.
"""
from __future__ import annotations

from typing import Callable

from ideplugin.dependencies import parse_plugin_notation
from ideplugin.errors import InvalidPluginNotationError
from ideplugin.extension import PlatformPluginExtension
from ideplugin.validator.diagnostics import Diagnostic, DiagnosticSeverity
from ideplugin.version import KNOWN_PLATFORM_TYPES

Rule = Callable[[PlatformPluginExtension], list[Diagnostic]]


def _make(
    code: str,
    severity: DiagnosticSeverity,
    message: str,
    setting: str = "",
    suggestion: str | None = None,
    rule: str = "",
) -> Diagnostic:
    return Diagnostic(
        severity=severity,
        code=code,
        message=message,
        setting=setting,
        suggestion=suggestion,
        rule=rule,
    )


def rule_missing_platform(ext: PlatformPluginExtension) -> list[Diagnostic]:
    """CFG001: a platform must be selected by version or by local path."""
    if ext.version.is_present or ext.local_path.is_present:
        return []
    return [
        _make(
            "CFG001",
            DiagnosticSeverity.ERROR,
            "No target platform: neither 'version' nor 'local_path' is set",
            setting="version",
            suggestion="Set 'version', e.g. 'IC-2022.1.1'",
            rule="rule_missing_platform",
        )
    ]


def rule_conflicting_platform(ext: PlatformPluginExtension) -> list[Diagnostic]:
    """CFG002: version and local_path should not be specified together."""
    if not (ext.version.is_present and ext.local_path.is_present):
        return []
    return [
        _make(
            "CFG002",
            DiagnosticSeverity.WARNING,
            "Both 'version' and 'local_path' are set; only one should select the platform",
            setting="local_path",
            suggestion="Remove either 'version' or 'local_path'",
            rule="rule_conflicting_platform",
        )
    ]


def rule_unknown_platform_type(ext: PlatformPluginExtension) -> list[Diagnostic]:
    """CFG003: the platform type is not one of the documented codes."""
    if not ext.version.is_present:
        return []
    platform_type = ext.get_version_type()
    if platform_type in KNOWN_PLATFORM_TYPES:
        return []
    return [
        _make(
            "CFG003",
            DiagnosticSeverity.INFORMATION,
            f"Platform type {platform_type!r} is not a known product code",
            setting="type",
            suggestion=f"Known codes: {', '.join(KNOWN_PLATFORM_TYPES)}",
            rule="rule_unknown_platform_type",
        )
    ]


def rule_ineffective_same_since_until(ext: PlatformPluginExtension) -> list[Diagnostic]:
    """CFG004: same_since_until_build is ignored when patching is disabled."""
    if not ext.same_since_until_build.get_or_else(False):
        return []
    if ext.update_since_until_build.get_or_else(True):
        return []
    return [
        _make(
            "CFG004",
            DiagnosticSeverity.WARNING,
            "'same_since_until_build' has no effect while 'update_since_until_build' is false",
            setting="same_since_until_build",
            rule="rule_ineffective_same_since_until",
        )
    ]


def rule_malformed_plugins(ext: PlatformPluginExtension) -> list[Diagnostic]:
    """CFG005: every plugin declaration must map to a descriptor."""
    diagnostics: list[Diagnostic] = []
    for value in ext.plugins.get():
        try:
            parse_plugin_notation(value)
        except InvalidPluginNotationError as exc:
            diagnostics.append(
                _make(
                    "CFG005",
                    DiagnosticSeverity.ERROR,
                    str(exc),
                    setting="plugins",
                    suggestion="Use 'id:version[@channel]', a bundled name, or project(':path')",
                    rule="rule_malformed_plugins",
                )
            )
    return diagnostics


DEFAULT_RULES: list[Rule] = [
    rule_missing_platform,
    rule_conflicting_platform,
    rule_unknown_platform_type,
    rule_ineffective_same_since_until,
    rule_malformed_plugins,
]
