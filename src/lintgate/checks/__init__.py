"""checks — check-type dispatch and rule evaluation against SourceFile.

Each built-in rule lives in its own module exposing
``check(source_file, options) -> list[dict]``.  The ``run_check()``
dispatcher maps the check-type string from the rule YAML to the matching
module, so a new check type only needs a new module and a dispatch branch.

Plugin trust model:
    - Plugins are loaded ONLY from lint_home/plugins/ unless the rule gives
      an absolute path.
    - Plugins execute in the same process.
    - Plugin contract: def check(source_file: SourceFile, options: list) -> list[dict]
"""

from __future__ import annotations

import importlib.util
import os
import sys
from pathlib import Path
from typing import Any

from lintgate._paths import plugins_dir
from lintgate.checks import (
    arrow_function_braces,
    class_method_newlines,
    jsx_expression_spacing,
    sort_imports,
)
from lintgate.exceptions import PluginError
from lintgate.lib import config
from lintgate.lib.source import SourceFile


# ---------------------------------------------------------------------------
# Dispatch function
# ---------------------------------------------------------------------------


def run_check(
    rule_obj: dict[str, Any],
    source_file: SourceFile,
    lint_home: Path,
) -> list[dict[str, Any]]:
    """Dispatch a single rule's check to the appropriate implementation.

    Args:
        rule_obj: Resolved rule object with 'rule_data', 'options', etc.
        source_file: The parsed file being linted.
        lint_home: Lint home directory for plugin resolution.

    Returns:
        List of violation dicts. Empty list means the rule passed.
    """
    rule_data = rule_obj["rule_data"]
    check_config: dict[str, Any] = rule_data.get("check", {})
    options: list[str] = rule_obj.get("options", [])
    check_type = check_config.get("type", "")

    ct = config.get("check_types")
    if check_type == ct["sort_imports"]:
        return sort_imports.check(source_file, options)
    elif check_type == ct["class_method_newlines"]:
        return class_method_newlines.check(source_file, options)
    elif check_type == ct["jsx_expression_spacing"]:
        return jsx_expression_spacing.check(source_file, options)
    elif check_type == ct["arrow_function_braces"]:
        return arrow_function_braces.check(source_file, options)
    elif check_type == ct["custom"]:
        return check_custom(source_file, check_config, options, lint_home, rule_obj["id"])
    else:
        sys.stderr.write(config.message(
            "unknown_check_type", check_type=check_type, rule_id=rule_obj["id"]
        ) + "\n")
        return []


# ---------------------------------------------------------------------------
# Custom / plugin checks
# ---------------------------------------------------------------------------


def check_custom(
    source_file: SourceFile,
    check_config: dict[str, Any],
    options: list[str],
    lint_home: Path,
    rule_id: str,
) -> list[dict[str, Any]]:
    """Run a custom check from a plugin file.

    A relative ``plugin`` path is resolved by file name inside the plugins
    directory.  A plugin that fails to load or raises is reported on stderr
    and as a single violation at the top of the file, so the remaining
    rules still run.

    Args:
        source_file: The parsed file being linted.
        check_config: Check configuration with plugin path and function name.
        options: Rule options passed through to the plugin.
        lint_home: Lint home directory for resolving relative plugin paths.
        rule_id: ID of the rule that references the plugin.

    Returns:
        List of violation dicts returned by the plugin function.
    """
    violations: list[dict[str, Any]] = []

    if "plugin" not in check_config:
        return violations

    plugin_path = check_config["plugin"]
    if not os.path.isabs(plugin_path):
        plugin_path = str(plugins_dir(lint_home) / os.path.basename(plugin_path))
    func_name: str = check_config.get(
        "function", config.get_str("defaults.plugin_function_name")
    )

    try:
        plugin_spec_name = config.get_str("defaults.plugin_spec_name")
        spec = importlib.util.spec_from_file_location(plugin_spec_name, plugin_path)
        if spec is None or spec.loader is None:
            raise ImportError(config.message("plugin_load_error", path=plugin_path))
        mod = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(mod)
        func = getattr(mod, func_name)
        result = func(source_file, list(options))
        if isinstance(result, list):
            violations.extend(result)
    except Exception as exc:
        err = PluginError(plugin_path, rule_id, exc)
        sys.stderr.write(f"{err}\n")
        violations.append(source_file.violation(0, 0, str(err)))

    return violations
