"""logger — optional JSONL record of lint runs.

A project config with ``logging.enabled: true`` makes the engine append one
JSON object per linted file to ``<logging.directory>/<filenames.scan_log>``.
The record carries enough to audit a run later without keeping the source:
line count and a truncated SHA-256 stand in for the text itself.
"""

from __future__ import annotations

import datetime
import hashlib
import json
from pathlib import Path
from typing import Any

from lintgate.lib import config


def _utc_timestamp() -> str:
    stamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
    return stamp.replace(
        config.get_str("formatting.utc_offset_source"),
        config.get_str("formatting.utc_offset_replacement"),
    )


def source_fingerprint(source: str) -> str:
    """Return ``sha256:`` plus the configured number of hex digits."""
    digest = hashlib.sha256(source.encode("utf-8")).hexdigest()
    length = config.get_int("defaults.hash_truncation_length")
    return config.get_str("formatting.hash_prefix") + digest[:length]


def log_scan(
    log_dir: str,
    *,
    filepath: str,
    preset_name: str,
    preset_version: str,
    status: str,
    diagnostics_data: list[dict[str, Any]],
    passed_rules: list[str],
    total_rules: int,
    source: str,
    scan_ms: int,
    fixes_applied: int = 0,
) -> None:
    """Append the record of one lint run.

    Does nothing when ``log_dir`` is empty; otherwise the directory is
    created on demand.  ``diagnostics_data`` holds short summaries
    (rule, severity, line), not full diagnostics.
    """
    if not log_dir:
        return
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    record = {
        "timestamp": _utc_timestamp(),
        "event": "lint",
        "file": filepath,
        "preset": preset_name,
        "preset_version": preset_version,
        "status": status,
        "diagnostics": diagnostics_data,
        "passed_rules": passed_rules,
        "total_rules": total_rules,
        "fixes_applied": fixes_applied,
        "code_length_lines": len(source.splitlines()),
        "code_hash": source_fingerprint(source),
        "scan_ms": scan_ms,
    }
    line = json.dumps(
        record, separators=tuple(config.get_list("formatting.json_separators"))
    )
    with open(directory / config.get_str("filenames.scan_log"), "a", encoding="utf-8") as fh:
        fh.write(line + "\n")
