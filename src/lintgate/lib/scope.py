"""scope — file-level scope checking and per-path preset resolution.

Evaluates whether a given file falls within a preset's enforcement perimeter.
Presets declare ``gated_paths`` (directories to enforce) and ``exempt_paths``
/ ``exempt_files`` (exclusions); the project config may add its own ``scope``
block, which is merged on top.  When a project config contains per-path
overrides, ``resolve_effective_preset`` maps a filepath to the correct preset
name, or to ``None`` if the path is explicitly exempted.
"""

from __future__ import annotations

import fnmatch
import os
from typing import Any, Iterable, Optional

from lintgate.lib import config
from lintgate.lib.models import ScopeConfig


def _matches_path(filepath: str, prefix: str) -> bool:
    return filepath.startswith(prefix) or f"/{prefix}" in filepath


def is_file_in_scope(
    filepath: str,
    preset_data: dict[str, Any],
    project_config: dict[str, Any],
) -> bool:
    """Check if a file is within the gated scope of a preset.

    Args:
        filepath: Path to the file being checked.
        preset_data: Parsed preset YAML dict with scope settings.
        project_config: Parsed .lintgate.yaml config.

    Returns:
        True if the file should be checked, False if exempt.
    """
    scope = ScopeConfig.from_dict(preset_data.get("scope")).merged(
        ScopeConfig.from_dict(project_config.get("scope"))
    )
    filepath = filepath.replace(os.sep, "/")
    filename = os.path.basename(filepath)

    if filename in scope.exempt_files:
        return False

    for ep in scope.exempt_paths:
        if _matches_path(filepath, ep):
            return False

    if not scope.gated_paths:
        return True

    return any(_matches_path(filepath, gp) for gp in scope.gated_paths)


def resolve_effective_preset(
    filepath: str,
    project_config: dict[str, Any],
) -> Optional[str]:
    """Resolve the effective preset name for a file after applying overrides.

    Checks per-path overrides in the project config in declaration order.
    The first matching pattern wins.  Returns None if the file is exempt
    (preset override set to null).

    Args:
        filepath: Path to the file being checked.
        project_config: Parsed .lintgate.yaml config.

    Returns:
        Preset name string, or None if the file is exempt.
    """
    base_preset: str = project_config.get(
        "preset", config.get_str("defaults.preset_name")
    )
    overrides: dict[str, Any] = project_config.get("overrides") or {}
    filepath = filepath.replace(os.sep, "/")

    for pattern, ovr in overrides.items():
        if not isinstance(ovr, dict):
            continue
        matched = (
            fnmatch.fnmatch(filepath, pattern)
            or fnmatch.fnmatch(os.path.basename(filepath), pattern)
            or filepath.startswith(pattern.rstrip("*"))
        )
        if not matched:
            continue
        return ovr.get("preset")

    return base_preset


def collect_files(
    paths: Iterable[str],
    extensions: Optional[list[str]] = None,
) -> list[str]:
    """Expand CLI path arguments into the list of files to lint.

    Files named explicitly are always kept.  Directories are walked
    recursively for files with a lintable extension, skipping the
    directories listed under ``defaults.skip_directories``.

    Args:
        paths: File and directory paths.
        extensions: Extensions to collect; defaults to every TypeScript and
            TSX extension in the config.

    Returns:
        De-duplicated file paths in argument order; each directory's files
        are sorted.
    """
    if extensions is None:
        extensions = config.get_list("extensions.typescript") + config.get_list(
            "extensions.tsx"
        )
    skipped = set(config.get_list("defaults.skip_directories"))

    files: list[str] = []
    for path in paths:
        if os.path.isdir(path):
            found: list[str] = []
            for dirpath, dirnames, filenames in os.walk(path):
                dirnames[:] = [d for d in dirnames if d not in skipped]
                for name in filenames:
                    if os.path.splitext(name)[1].lower() in extensions:
                        found.append(os.path.join(dirpath, name))
            files.extend(sorted(found))
        else:
            files.append(path)

    seen: set[str] = set()
    unique: list[str] = []
    for f in files:
        if f not in seen:
            seen.add(f)
            unique.append(f)
    return unique
