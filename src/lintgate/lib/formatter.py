"""formatter — diagnostic output formatting for stderr and JSON.

The stderr format is meant for people: one block per diagnostic with the
location, the offending source line, a caret marker under the reported range
and the message, followed by a summary bar.  The JSON format is meant for
tools and carries every diagnostic field including the fix.
"""

from __future__ import annotations

from typing import Any

from lintgate.lib import config
from lintgate.lib.models import Diagnostic
from lintgate.lib.theme import code as _c


# ---------------------------------------------------------------------------
# Stderr formatting
# ---------------------------------------------------------------------------


def caret_span(diagnostic: Diagnostic) -> tuple[int, int]:
    """Return the (offset, width) of the caret marker in characters.

    Diagnostic columns are byte columns, so the source line is measured in
    UTF-8 bytes and converted back.  A range that runs past the end of the
    line is clipped to it; the width is never below one.
    """
    line_bytes = diagnostic.source.encode("utf-8")
    col = max(diagnostic.column - 1, 0)
    prefix = line_bytes[:col].decode("utf-8", errors="ignore")
    marked = line_bytes[col:col + max(diagnostic.end - diagnostic.start, 0)]
    width = len(marked.decode("utf-8", errors="ignore"))
    return len(prefix), max(width, 1)


def format_diagnostic_stderr(filepath: str, diagnostic: Diagnostic) -> str:
    """Format a single diagnostic for stderr output.

    Args:
        filepath: Path of the linted file.
        diagnostic: The diagnostic to render.

    Returns:
        Formatted multi-line string for stderr.
    """
    location_tpl = config.get_str("formatting.location_template")
    caret = config.get_str("formatting.caret_char")
    fixable = config.get_str("labels.fixable")
    severity_role = (
        "error" if diagnostic.severity == config.get_str("severities.block") else "warning"
    )

    location = location_tpl.format(
        filepath=filepath, line=diagnostic.line, column=diagnostic.column
    )
    parts: list[str] = [
        f"  {_c('location')}{location}{_c('reset')}  "
        f"{_c('rule_id')}{diagnostic.rule_id}{_c('reset')} "
        f"{_c(severity_role)}({diagnostic.severity}){_c('reset')}"
    ]
    if diagnostic.source:
        offset, width = caret_span(diagnostic)
        parts.append(f"    {diagnostic.source}")
        parts.append(f"    {_c('caret')}{' ' * offset}{caret * width}{_c('reset')}")
    message = f"  {_c(severity_role)}{diagnostic.message}{_c('reset')}"
    if diagnostic.fix is not None:
        message += f" {_c('dim')}{fixable}{_c('reset')}"
    parts.append(message)
    return "\n".join(parts)


def format_summary_stderr(
    preset_name: str,
    preset_version: str,
    blocking_count: int,
    warning_count: int,
) -> str:
    """Format the summary footer bar for stderr output.

    Args:
        preset_name: Name of the active preset.
        preset_version: Version of the active preset.
        blocking_count: Number of blocking diagnostics.
        warning_count: Number of warning diagnostics.

    Returns:
        Formatted summary string.
    """
    bar_width = config.get_int("formatting.summary_bar_width")
    bar_char = config.get_str("formatting.summary_bar_char")
    lbl_preset = config.get_str("labels.preset")
    lbl_diagnostics = config.get_str("labels.diagnostics")
    lbl_blocking = config.get_str("labels.blocking")
    lbl_warnings = config.get_str("labels.warnings")

    bar = f"{_c('summary_bar')}{bar_char * bar_width}{_c('reset')}"
    parts: list[str] = [f"\n{bar}"]
    parts.append(
        f"  {_c('bold')}{lbl_preset}{_c('reset')} "
        f"{_c('info')}{preset_name}{_c('reset')} "
        f"{_c('dim')}(v{preset_version}){_c('reset')}"
    )
    parts.append(
        f"  {_c('bold')}{lbl_diagnostics}{_c('reset')} "
        f"{_c('error')}{blocking_count} {lbl_blocking}{_c('reset')}, "
        f"{_c('warning')}{warning_count} {lbl_warnings}{_c('reset')}"
    )
    if blocking_count > 0:
        parts.append(f"  {_c('blocked')}{_c('bold')}{config.get_str('labels.rejected')}{_c('reset')}")
    else:
        parts.append(f"  {_c('allowed')}{config.get_str('labels.passed')}{_c('reset')}")
    parts.append(bar)
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# JSON formatting
# ---------------------------------------------------------------------------


def format_diagnostics_json(
    filepath: str,
    diagnostics: list[Diagnostic],
    preset_name: str,
    preset_version: str,
    total_rules: int,
    fixes_applied: int = 0,
) -> dict[str, Any]:
    """Format a file's diagnostics as a JSON-compatible dict.

    Args:
        filepath: Path of the linted file.
        diagnostics: Diagnostics in report order.
        preset_name: Name of the active preset.
        preset_version: Version of the active preset.
        total_rules: Number of active rules.
        fixes_applied: Number of fixes applied, when fixing.

    Returns:
        Dict suitable for json.dumps().
    """
    sev_block = config.get_str("severities.block")
    sev_warn = config.get_str("severities.warn")
    blocking = sum(1 for d in diagnostics if d.severity == sev_block)
    warnings = sum(1 for d in diagnostics if d.severity == sev_warn)

    return {
        "status": config.get_str(
            "statuses.rejected" if blocking > 0 else "statuses.passed"
        ),
        "file": filepath,
        "preset": preset_name,
        "preset_version": preset_version,
        "diagnostics": [d.to_dict() for d in diagnostics],
        "summary": {
            "blocking": blocking,
            "warnings": warnings,
            "total_rules": total_rules,
            "fixes_applied": fixes_applied,
        },
    }
