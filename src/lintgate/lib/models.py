"""Data models for Lintgate diagnostics, fixes, scope and project config.

Typed dataclasses shared by the engine, the rule checks and the output
formatters, plus structural validation for ``.lintgate.yaml``.  Offsets are
byte offsets into the UTF-8 encoded source, which is what tree-sitter
reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


# ---------------------------------------------------------------------------
# Fix and diagnostic models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Replacement:
    """A single contiguous text replacement.

    Attributes:
        start: Byte offset where the replaced span starts.
        end: Byte offset where the replaced span ends (exclusive).
        text: Replacement text.
    """

    start: int
    end: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable mapping."""
        return {"start": self.start, "end": self.end, "text": self.text}


@dataclass(frozen=True)
class Diagnostic:
    """A single rule diagnostic found during linting.

    Attributes:
        rule_id: Identifier of the rule that reported it.
        severity: 'block' or 'warn'.
        line: 1-based line of the reported range start.
        column: 1-based (byte) column of the reported range start.
        start: Byte offset of the reported range start.
        end: Byte offset of the reported range end.
        source: Text of the source line the range starts on.
        message: Human-readable message.
        fix: Optional automatic fix.
    """

    rule_id: str
    severity: str
    line: int
    column: int
    start: int
    end: int
    source: str
    message: str
    fix: Optional[Replacement] = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable mapping."""
        return {
            "rule": self.rule_id,
            "severity": self.severity,
            "line": self.line,
            "column": self.column,
            "start": self.start,
            "end": self.end,
            "source": self.source,
            "message": self.message,
            "fix": self.fix.to_dict() if self.fix else None,
        }


# ---------------------------------------------------------------------------
# Scope model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScopeConfig:
    """Scope definition from a preset or project config.

    Attributes:
        gated_paths: Paths that are actively linted (empty = all).
        exempt_paths: Paths excluded from linting.
        exempt_files: Individual filenames excluded from linting.
    """

    gated_paths: list[str] = field(default_factory=list)
    exempt_paths: list[str] = field(default_factory=list)
    exempt_files: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> ScopeConfig:
        """Build from a raw dict (e.g. preset_data['scope']).

        Args:
            data: Scope mapping from YAML, or None.

        Returns:
            ScopeConfig instance; empty when data is falsy.
        """
        data = data or {}
        return cls(
            gated_paths=list(data.get("gated_paths") or []),
            exempt_paths=list(data.get("exempt_paths") or []),
            exempt_files=list(data.get("exempt_files") or []),
        )

    def merged(self, other: ScopeConfig) -> ScopeConfig:
        """Return a scope whose lists are this scope's plus ``other``'s."""
        return ScopeConfig(
            gated_paths=self.gated_paths + other.gated_paths,
            exempt_paths=self.exempt_paths + other.exempt_paths,
            exempt_files=self.exempt_files + other.exempt_files,
        )


# ---------------------------------------------------------------------------
# Project configuration validation
# ---------------------------------------------------------------------------


def validate_project_config(data: Any) -> list[str]:
    """Validate the structure of a .lintgate.yaml dict.

    Returns a list of human-readable error strings (empty = valid).

    Args:
        data: The parsed YAML content.

    Returns:
        List of validation error messages. Empty if valid.
    """
    errors: list[str] = []

    if not isinstance(data, dict):
        errors.append(f"Project config must be a mapping, got {type(data).__name__}")
        return errors

    if "preset" not in data:
        errors.append("Missing required key: 'preset'")

    preset_val = data.get("preset")
    if preset_val is not None and not isinstance(preset_val, str):
        errors.append(
            f"'preset' must be a string, got {type(preset_val).__name__}"
        )

    for mapping_key in ("overrides", "rule_overrides", "logging"):
        val = data.get(mapping_key)
        if val is not None and not isinstance(val, dict):
            errors.append(
                f"'{mapping_key}' must be a mapping, got {type(val).__name__}"
            )

    rule_overrides = data.get("rule_overrides")
    if isinstance(rule_overrides, dict):
        for rule_id, ovr in rule_overrides.items():
            if not isinstance(ovr, dict):
                errors.append(
                    f"rule_overrides.{rule_id} must be a mapping, "
                    f"got {type(ovr).__name__}"
                )
                continue
            options = ovr.get("options")
            if options is not None and not isinstance(options, list):
                errors.append(
                    f"rule_overrides.{rule_id}.options must be a list, "
                    f"got {type(options).__name__}"
                )

    scope = data.get("scope")
    if scope is not None:
        if not isinstance(scope, dict):
            errors.append(
                f"'scope' must be a mapping, got {type(scope).__name__}"
            )
        else:
            for list_key in ("gated_paths", "exempt_paths", "exempt_files"):
                val = scope.get(list_key)
                if val is not None and not isinstance(val, list):
                    errors.append(
                        f"scope.{list_key} must be a list, "
                        f"got {type(val).__name__}"
                    )

    return errors
