"""Diagnostic types for configuration validation.

A ``Diagnostic`` is an annotated message attached to the setting it
concerns.  Diagnostics are produced by the ``Validator`` and rendered by
the ``validate`` CLI command.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostics, aligned with LSP conventions."""

    ERROR = auto()
    WARNING = auto()
    INFORMATION = auto()
    HINT = auto()


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding.

    Parameters
    ----------
    severity:
        How serious this finding is.
    code:
        A short machine-readable identifier, e.g. ``"CFG001"``.
    message:
        Human-readable description of the problem.
    setting:
        Name of the offending setting, or ``""`` for cross-cutting findings.
    suggestion:
        Optional human-readable fix suggestion.
    rule:
        The rule name that produced this diagnostic.
    """

    severity: DiagnosticSeverity
    code: str
    message: str
    setting: str = field(default="")
    suggestion: str | None = field(default=None)
    rule: str = field(default="")

    def __str__(self) -> str:
        prefix = f"[{self.code}] {self.severity.name}"
        location = f" ({self.setting})" if self.setting else ""
        suggestion_part = f" (hint: {self.suggestion})" if self.suggestion else ""
        return f"{prefix}{location}: {self.message}{suggestion_part}"

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic should block a successful validation."""
        return self.severity == DiagnosticSeverity.ERROR
