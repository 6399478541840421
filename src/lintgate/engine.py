"""Lintgate engine — thin orchestrator for running lint rules over a file.

Composes the library modules to lint a TypeScript / JavaScript source string
against a preset and return structured results.  This is the main entry
point for programmatic usage.

Design notes:
    The engine never inspects syntax itself.  It delegates parsing to
    ``SourceFile`` (lib/source) and rule evaluation to ``lintgate.checks``,
    so the engine stays a pure orchestration layer: configuration, scope,
    counting, logging, output and fix application.
"""

from __future__ import annotations

import json
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from lintgate import __version__ as VERSION
from lintgate.checks import run_check
from lintgate.exceptions import LintgateConfigError, LintgateParseError
from lintgate.lib import config
from lintgate.lib.fixes import apply_replacements
from lintgate.lib.formatter import (
    format_diagnostic_stderr,
    format_diagnostics_json,
    format_summary_stderr,
)
from lintgate.lib.logger import log_scan
from lintgate.lib.models import Diagnostic, validate_project_config
from lintgate.lib.rules import (
    apply_project_overrides,
    find_lint_home,
    load_preset,
    load_project_config,
    resolve_rules,
)
from lintgate.lib.scope import is_file_in_scope, resolve_effective_preset
from lintgate.lib.source import SourceFile


@dataclass
class LintResult:
    """Result of linting one file against a preset."""

    status: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    blocking_count: int = 0
    warning_count: int = 0
    scan_ms: int = 0
    preset_name: str = ""
    preset_version: str = ""
    fixed_source: Optional[str] = None
    fixes_applied: int = 0


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def resolve_project_config(
    config_path: Union[str, Path, None],
) -> dict[str, Any]:
    """Load and validate the project config, falling back to the default preset.

    Args:
        config_path: Path to a .lintgate.yaml file, or None.

    Returns:
        The project config mapping.

    Raises:
        LintgateConfigError: If the file is not valid YAML or fails
            structural validation.
    """
    try:
        project_config = load_project_config(config_path)
    except yaml.YAMLError as exc:
        raise LintgateConfigError(str(config_path), [str(exc)]) from exc
    if project_config is None:
        return {"preset": config.get_str("defaults.preset_name")}
    errors = validate_project_config(project_config)
    if errors:
        raise LintgateConfigError(str(config_path), errors)
    return project_config


def to_diagnostic(rule_obj: dict[str, Any], violation: dict[str, Any]) -> Diagnostic:
    """Turn a check's violation dict into a Diagnostic."""
    fallback_line = config.get_int("defaults.fallback_line")
    default_msg = config.message("default_violation", rule_id=rule_obj["id"])
    return Diagnostic(
        rule_id=rule_obj["id"],
        severity=rule_obj["severity"],
        line=violation.get("line", fallback_line),
        column=violation.get("column", fallback_line),
        start=violation.get("start", 0),
        end=violation.get("end", violation.get("start", 0)),
        source=violation.get("source", ""),
        message=violation.get("message") or default_msg,
        fix=violation.get("fix"),
    )


# ---------------------------------------------------------------------------
# Linting
# ---------------------------------------------------------------------------


def lint_source(
    source: str,
    filepath: str,
    config_path: Union[str, Path, None] = None,
    *,
    output_format: str = "",
    skip_scope: bool = False,
    fix: bool = False,
) -> LintResult:
    """Lint a source string against the project's preset.

    This is the primary entry point for Lintgate.

    Args:
        source: TypeScript / JavaScript source code as a string.
        filepath: Path to the file (grammar choice, scope and output).
        config_path: Path to the .lintgate.yaml project config.  When None
            or missing, the default preset is used.
        output_format: 'stderr', 'json' or 'quiet'.  Defaults to the value
            from config.
        skip_scope: If True, skip gated_paths scope checking.
        fix: If True, apply every available fix and return the result in
            ``fixed_source``.

    Returns:
        LintResult with status, diagnostics, timing and fix outcome.

    Raises:
        LintgateConfigError: If the project config is invalid.
        LintgateParseError: If the source cannot be parsed.
    """
    if not output_format:
        output_format = config.get_str("formats.default")

    status_passed = config.get_str("statuses.passed")
    status_rejected = config.get_str("statuses.rejected")
    sev_off = config.get_str("severities.off")
    sev_block = config.get_str("severities.block")
    sev_warn = config.get_str("severities.warn")
    default_version = config.get_str("defaults.preset_version")
    json_indent = config.get_int("defaults.json_indent")
    violation_sep = config.get_str("formatting.violation_separator")

    start = time.time()

    # 1. Resolve lint home and project config
    lint_home = find_lint_home()
    if not lint_home:
        return LintResult(status=status_passed)

    project_config = resolve_project_config(config_path)

    # 2. Determine effective preset for this file path
    preset_name = resolve_effective_preset(filepath, project_config)
    if preset_name is None:
        return LintResult(status=status_passed)

    preset_data = load_preset(preset_name, lint_home)
    if not preset_data:
        sys.stderr.write(
            config.message("preset_not_found", name=preset_name, path=lint_home) + "\n"
        )
        return LintResult(status=status_passed, preset_name=preset_name)

    # 3. Check file scope (early exit if out of scope)
    if not skip_scope and not is_file_in_scope(filepath, preset_data, project_config):
        return LintResult(status=status_passed, preset_name=preset_name)

    # 4. Load and filter active rules
    rules = resolve_rules(preset_data, lint_home)
    rules = apply_project_overrides(rules, project_config)
    active_rules = [r for r in rules if r["enabled"] and r["severity"] != sev_off]

    # 5. Parse once, then run every rule against the shared tree
    try:
        source_file = SourceFile(source, filepath)
    except Exception as exc:
        raise LintgateParseError(filepath, exc) from exc

    diagnostics: list[Diagnostic] = []
    passed_rules: list[str] = []

    for rule_obj in active_rules:
        try:
            violations = run_check(rule_obj, source_file, lint_home)
        except Exception as exc:
            sys.stderr.write("  " + config.message(
                "rule_exception",
                rule_id=rule_obj["id"],
                error=type(exc).__name__,
                detail=str(exc),
            ) + "\n")
            violations = [source_file.violation(
                0, 0, config.message("internal_rule_error", rule_id=rule_obj["id"])
            )]

        if violations:
            diagnostics.extend(to_diagnostic(rule_obj, v) for v in violations)
        else:
            passed_rules.append(rule_obj["id"])

    # 6. Apply fixes
    fixed_source: Optional[str] = None
    fixes_applied = 0
    if fix:
        fixed_source, fixes_applied = apply_replacements(
            source, [d.fix for d in diagnostics if d.fix is not None]
        )

    # 7. Compute timing and counts
    scan_ms = int((time.time() - start) * 1000)
    blocking_count = sum(1 for d in diagnostics if d.severity == sev_block)
    warning_count = sum(1 for d in diagnostics if d.severity == sev_warn)
    status = status_rejected if blocking_count > 0 else status_passed
    preset_version = str(
        (preset_data.get("preset") or {}).get("version", default_version)
    )

    # 8. Log the result (if enabled)
    logging_cfg = project_config.get("logging") or {}
    log_dir = logging_cfg.get("directory", "")
    if logging_cfg.get("enabled", False) and log_dir:
        log_scan(
            log_dir,
            filepath=filepath,
            preset_name=preset_name,
            preset_version=preset_version,
            status=status,
            diagnostics_data=[
                {"rule": d.rule_id, "severity": d.severity, "line": d.line}
                for d in diagnostics
            ],
            passed_rules=passed_rules,
            total_rules=len(active_rules),
            source=source,
            scan_ms=scan_ms,
            fixes_applied=fixes_applied,
        )

    # 9. Format output
    if output_format == config.get_str("formats.json"):
        json_data = format_diagnostics_json(
            filepath,
            diagnostics,
            preset_name,
            preset_version,
            len(active_rules),
            fixes_applied,
        )
        sys.stderr.write(json.dumps(json_data, indent=json_indent) + "\n")
    elif output_format == config.get_str("formats.stderr") and diagnostics:
        output_parts = [format_diagnostic_stderr(filepath, d) for d in diagnostics]
        output_parts.append(
            format_summary_stderr(
                preset_name, preset_version, blocking_count, warning_count
            )
        )
        sys.stderr.write(violation_sep.join(output_parts) + "\n")

    return LintResult(
        status=status,
        diagnostics=diagnostics,
        blocking_count=blocking_count,
        warning_count=warning_count,
        scan_ms=scan_ms,
        preset_name=preset_name,
        preset_version=preset_version,
        fixed_source=fixed_source,
        fixes_applied=fixes_applied,
    )


def fix_source(
    source: str,
    filepath: str,
    config_path: Union[str, Path, None] = None,
    *,
    skip_scope: bool = False,
) -> tuple[str, int]:
    """Apply fixes repeatedly until the source stops changing.

    Overlapping fixes are skipped within one pass, so a later pass picks
    them up.  The number of passes is capped by ``defaults.max_fix_passes``.

    Args:
        source: Source text to fix.
        filepath: Path to the file.
        config_path: Path to the .lintgate.yaml project config.
        skip_scope: If True, skip gated_paths scope checking.

    Returns:
        Tuple of (fixed source, total number of fixes applied).

    Raises:
        LintgateConfigError: If the project config is invalid.
        LintgateParseError: If the source (or a fixed version) cannot be parsed.
    """
    quiet = config.get_str("formats.quiet")
    total = 0
    for _ in range(config.get_int("defaults.max_fix_passes")):
        result = lint_source(
            source,
            filepath,
            config_path,
            output_format=quiet,
            skip_scope=skip_scope,
            fix=True,
        )
        if not result.fixes_applied or result.fixed_source is None:
            break
        total += result.fixes_applied
        if result.fixed_source == source:
            break
        source = result.fixed_source
    return source, total


def main() -> None:
    """CLI entry point for python -m lintgate.engine."""
    import argparse

    fmt_stderr = config.get_str("formats.stderr")
    fmt_json = config.get_str("formats.json")
    fmt_quiet = config.get_str("formats.quiet")
    stdin_filename = config.get_str("defaults.stdin_filename")
    exit_blocked = config.get_int("exit_codes.blocked")
    exit_ok = config.get_int("exit_codes.ok")
    exit_error = config.get_int("exit_codes.error")

    parser = argparse.ArgumentParser(
        description="Lintgate engine: lint one TypeScript / JavaScript file",
    )
    parser.add_argument("--file", help="Path to the file to lint")
    parser.add_argument(
        "--stdin", action="store_true", help="Read code from stdin"
    )
    parser.add_argument(
        "--filename", help="Filename to use when reading from stdin"
    )
    parser.add_argument("--config", help="Path to .lintgate.yaml")
    parser.add_argument(
        "--format",
        choices=[fmt_stderr, fmt_json, fmt_quiet],
        default=fmt_stderr,
        help="Output format",
    )
    parser.add_argument(
        "--no-scope",
        action="store_true",
        help="Skip scope checking",
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Apply fixes (written back to --file, or to stdout with --stdin)",
    )
    parser.add_argument(
        "--version", action="version", version=f"lintgate {VERSION}"
    )

    args = parser.parse_args()

    if args.stdin:
        # Bytes, so CRLF line endings survive.
        source = sys.stdin.buffer.read().decode("utf-8")
        filepath = args.filename or stdin_filename
    elif args.file:
        filepath = args.file
        with open(filepath, "r", encoding="utf-8", newline="") as fh:
            source = fh.read()
    else:
        parser.error("Either --file or --stdin is required")
        return

    try:
        if args.fix:
            fixed, _ = fix_source(
                source, filepath, args.config, skip_scope=args.no_scope
            )
            if args.stdin:
                sys.stdout.buffer.write(fixed.encode("utf-8"))
                sys.stdout.flush()
            elif fixed != source:
                with open(filepath, "w", encoding="utf-8", newline="") as fh:
                    fh.write(fixed)
            source = fixed
        result = lint_source(
            source,
            filepath,
            args.config,
            output_format=args.format,
            skip_scope=args.no_scope,
        )
    except (LintgateParseError, LintgateConfigError) as exc:
        sys.stderr.write(f"  {exc}\n")
        sys.exit(exit_error)

    sys.exit(exit_blocked if result.blocking_count > 0 else exit_ok)


if __name__ == "__main__":
    main()
