"""rules — rule loading, preset resolution, and project-level overrides.

Handles rule metadata YAML files, preset manifests with inheritance via the
``extends`` key, and project-level configuration from ``.lintgate.yaml``.
Preset inheritance lets a child preset include all rules from a parent and
selectively override severity, enabled status, or options.  Project config
layering then applies repository-specific ``rule_overrides`` on top of the
fully resolved rule set.

Design notes:
    Inheritance resolution is recursive: the parent chain is resolved first,
    then child rules are merged on top.  Later rules override earlier ones
    when rule IDs collide, giving the most-specific preset the final say.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional, Union

from lintgate._paths import get_lint_home, presets_dir, rules_dir
from lintgate.lib import config
from lintgate.lib.yaml_loader import load_yaml


def find_lint_home() -> Optional[Path]:
    """Resolve the lint home directory (auto-discovered or $LINTGATE_HOME).

    Returns:
        The lint home Path if the directory exists, else None.
    """
    home = get_lint_home()
    if home.is_dir():
        return home
    return None


def load_rule(rule_id: str, lint_home: Path) -> Optional[dict[str, Any]]:
    """Load a single rule YAML file by ID.

    Args:
        rule_id: The rule identifier (matches filename without extension).
        lint_home: The lint home directory for rule discovery.

    Returns:
        Parsed rule dict, or None if the rule file does not exist.
    """
    ext = config.get_str("filenames.rule_extension")
    rule_path = rules_dir(lint_home) / f"{rule_id}{ext}"
    if not rule_path.is_file():
        return None
    return load_yaml(str(rule_path))


def load_preset(preset_name: str, lint_home: Path) -> Optional[dict[str, Any]]:
    """Load a preset manifest by name.

    Args:
        preset_name: The preset identifier (matches filename without extension).
        lint_home: The lint home directory for preset discovery.

    Returns:
        Parsed preset dict, or None if the preset file does not exist.
    """
    ext = config.get_str("filenames.preset_extension")
    preset_path = presets_dir(lint_home) / f"{preset_name}{ext}"
    if not preset_path.is_file():
        return None
    return load_yaml(str(preset_path))


def _list_stems(directory: Path) -> list[str]:
    ext = config.get_str("filenames.rule_extension")
    if not directory.is_dir():
        return []
    return sorted(p.name[: -len(ext)] for p in directory.iterdir() if p.name.endswith(ext))


def list_rule_ids(lint_home: Path) -> list[str]:
    """Return the IDs of every rule file in the rules directory."""
    return _list_stems(rules_dir(lint_home))


def list_presets(lint_home: Path) -> list[str]:
    """Return the names of every preset file in the presets directory."""
    return _list_stems(presets_dir(lint_home))


def build_rule_obj(
    rule_id: str,
    rule_data: dict[str, Any],
    entry: dict[str, Any],
) -> dict[str, Any]:
    """Combine rule metadata and a preset entry into a rule object.

    Entry values win over the rule file's ``defaults`` which win over the
    package defaults.

    Args:
        rule_id: The rule identifier.
        rule_data: Parsed rule YAML.
        entry: Preset (or ad-hoc) entry with optional severity/enabled/options.

    Returns:
        Rule object with id, rule_data, severity, enabled and options keys.
    """
    defaults = rule_data.get("defaults", {})
    return {
        "id": rule_id,
        "rule_data": rule_data,
        "severity": entry.get(
            "severity", defaults.get("severity", config.get_str("defaults.severity"))
        ),
        "enabled": entry.get(
            "enabled", defaults.get("enabled", config.get("defaults.enabled"))
        ),
        "options": list(entry.get("options", defaults.get("options", []))),
    }


def resolve_rules(
    preset_data: dict[str, Any],
    lint_home: Path,
    _chain: Optional[set[str]] = None,
) -> list[dict[str, Any]]:
    """Resolve all rule references from a preset into full rule objects.

    Handles preset inheritance via 'extends' and applies severity/enabled/
    options overrides from the preset definition.

    Args:
        preset_data: Parsed preset YAML dict.
        lint_home: The lint home directory for rule discovery.

    Returns:
        List of resolved rule objects with full rule data and overrides applied.
        A preset already visited in the ``extends`` chain is not loaded again.
    """
    rules: list[dict[str, Any]] = []
    chain = set(_chain or ())
    chain.add(str((preset_data.get("preset") or {}).get("name", "")))

    parent_name = preset_data.get("extends")
    if parent_name and parent_name not in chain:
        parent = load_preset(parent_name, lint_home)
        if parent:
            rules = resolve_rules(parent, lint_home, chain | {parent_name})

    entries = list(preset_data.get("rules") or []) + list(
        preset_data.get("additional_rules") or []
    )
    for entry in entries:
        if isinstance(entry, str):
            entry = {"id": entry}
        rule_id = entry.get("id")
        if not rule_id:
            continue

        rule_data = load_rule(rule_id, lint_home)
        if not rule_data:
            sys.stderr.write(
                config.message("rule_not_found", rule_id=rule_id, path=rules_dir(lint_home))
                + "\n"
            )
            continue

        rule_obj = build_rule_obj(rule_id, rule_data, entry)
        existing_ids = [r["id"] for r in rules]
        if rule_id in existing_ids:
            rules[existing_ids.index(rule_id)] = rule_obj
        else:
            rules.append(rule_obj)

    return rules


def load_project_config(
    config_path: Union[str, Path, None],
) -> Optional[dict[str, Any]]:
    """Load the project's .lintgate.yaml configuration.

    Args:
        config_path: Path to the .lintgate.yaml file, or None.

    Returns:
        Parsed config, or None if no path is given or the file is missing.
    """
    if not config_path:
        return None
    try:
        return load_yaml(str(config_path))
    except FileNotFoundError:
        return None


def apply_project_overrides(
    rules: list[dict[str, Any]],
    project_config: dict[str, Any],
) -> list[dict[str, Any]]:
    """Apply rule_overrides from the project config to resolved rules.

    Modifies rules in-place for severity, enabled, and options overrides.
    An ``options`` override replaces the rule's option list.

    Args:
        rules: List of resolved rule objects.
        project_config: Parsed .lintgate.yaml config.

    Returns:
        The same rules list with overrides applied in-place.
    """
    overrides = project_config.get("rule_overrides") or {}
    if not overrides:
        return rules

    for rule in rules:
        rule_id = rule["id"]
        if rule_id in overrides:
            ovr = overrides[rule_id]
            if "severity" in ovr:
                rule["severity"] = ovr["severity"]
            if "enabled" in ovr:
                rule["enabled"] = ovr["enabled"]
            if "options" in ovr:
                rule["options"] = list(ovr["options"])

    return rules
