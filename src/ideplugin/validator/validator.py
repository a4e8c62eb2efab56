"""Configuration validator: checks a ``PlatformPluginExtension``.

The ``Validator`` runs a configurable set of validation rules against an
extension and returns a list of ``Diagnostic`` objects.  In strict mode,
warnings are promoted to errors so that CI pipelines can enforce tighter
quality gates.

Usage
-----
::

    from ideplugin.config import load_extension
    from ideplugin.validator import Validator

    ext = load_extension("plugin.yaml")
    diagnostics = Validator().validate(ext)
    errors = [d for d in diagnostics if d.is_error]
"""
from __future__ import annotations

import logging

from ideplugin.extension import PlatformPluginExtension
from ideplugin.validator.diagnostics import Diagnostic, DiagnosticSeverity
from ideplugin.validator.rules import DEFAULT_RULES, Rule

logger = logging.getLogger(__name__)


class Validator:
    """Validator for plugin build configurations.

    Parameters
    ----------
    rules:
        The list of validation rules to run.  Defaults to all built-in
        rules (``DEFAULT_RULES``).
    strict:
        When ``True``, WARNING-level diagnostics are promoted to ERROR.
    """

    def __init__(
        self,
        rules: list[Rule] | None = None,
        strict: bool = False,
    ) -> None:
        self._rules: list[Rule] = rules if rules is not None else list(DEFAULT_RULES)
        self._strict: bool = strict

    def validate(self, ext: PlatformPluginExtension) -> list[Diagnostic]:
        """Run all rules against ``ext`` and return the collected diagnostics.

        Returns
        -------
        list[Diagnostic]
            All findings, sorted by code.  May be empty.
        """
        all_diagnostics: list[Diagnostic] = []
        for rule in self._rules:
            try:
                all_diagnostics.extend(rule(ext))
            except Exception as exc:  # noqa: BLE001
                # A broken rule is reported, not raised.
                logger.exception("Validation rule %r failed", rule.__name__)
                all_diagnostics.append(
                    Diagnostic(
                        severity=DiagnosticSeverity.ERROR,
                        code="CFG999",
                        message=f"Internal validator error in rule {rule.__name__!r}: {exc}",
                        suggestion="Please report this as a bug",
                        rule=rule.__name__,
                    )
                )

        if self._strict:
            all_diagnostics = [
                Diagnostic(
                    severity=DiagnosticSeverity.ERROR,
                    code=d.code,
                    message=d.message,
                    setting=d.setting,
                    suggestion=d.suggestion,
                    rule=d.rule,
                )
                if d.severity == DiagnosticSeverity.WARNING
                else d
                for d in all_diagnostics
            ]

        all_diagnostics.sort(key=lambda d: d.code)
        return all_diagnostics

    def add_rule(self, rule: Rule) -> None:
        """Add a custom rule to this validator instance."""
        self._rules.append(rule)

    @property
    def rule_count(self) -> int:
        """Return the number of rules currently registered."""
        return len(self._rules)


def validate_extension(ext: PlatformPluginExtension, strict: bool = False) -> list[Diagnostic]:
    """Convenience function: validate ``ext`` with the default rules."""
    return Validator(strict=strict).validate(ext)
