"""Configuration validator module.

Exports the ``Validator`` class, the ``validate_extension`` convenience
function, ``Diagnostic`` types, and all built-in validation rules.
"""
from __future__ import annotations

from ideplugin.validator.diagnostics import Diagnostic, DiagnosticSeverity
from ideplugin.validator.rules import DEFAULT_RULES, Rule
from ideplugin.validator.validator import Validator, validate_extension

__all__ = [
    "Validator",
    "validate_extension",
    "Diagnostic",
    "DiagnosticSeverity",
    "Rule",
    "DEFAULT_RULES",
]
