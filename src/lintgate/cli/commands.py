"""commands — handlers for the Lintgate CLI subcommands.

Each ``cmd_*`` function receives the parsed argparse namespace, prints to
stdout (results meant for the user) or stderr (diagnostics and errors), and
ends the process with one of the exit codes from ``config/defaults.yaml``
when the outcome is not plain success.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, NoReturn

from lintgate.checks import run_check
from lintgate.engine import fix_source, lint_source, to_diagnostic
from lintgate.exceptions import LintgateConfigError, LintgateParseError
from lintgate.lib import config
from lintgate.lib.formatter import format_diagnostic_stderr
from lintgate.lib.rules import (
    build_rule_obj,
    find_lint_home,
    list_presets,
    list_rule_ids,
    load_preset,
    load_rule,
    resolve_rules,
)
from lintgate.lib.scope import collect_files
from lintgate.lib.source import SourceFile
from lintgate.lib.theme import colorize
from lintgate.lib.yaml_loader import dump_yaml


# -------------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------------


def _color(text: str, role: str) -> str:
    """Colorize text for stdout output."""
    return colorize(text, role, stream=sys.stdout)


def _fail(message: str) -> NoReturn:
    sys.stderr.write(f"  {message}\n")
    sys.exit(config.get_int("exit_codes.error"))


def _require_lint_home() -> Path:
    lint_home = find_lint_home()
    if lint_home is None:
        _fail(config.message("lint_home_not_found"))
    return lint_home


def _read_source(path: str) -> str:
    with open(path, "r", encoding="utf-8", newline="") as fh:
        return fh.read()


def _print_rule_line(rule_obj: dict[str, Any]) -> None:
    tpl = config.get_str("formatting.rule_list_template")
    severity = rule_obj["severity"] if rule_obj["enabled"] else config.get_str(
        "severities.off"
    )
    line = tpl.format(
        rule_id=rule_obj["id"],
        severity=severity,
        description=rule_obj["rule_data"].get("description", ""),
    )
    print(line)


# -------------------------------------------------------------------------
# check
# -------------------------------------------------------------------------


def cmd_check(args: argparse.Namespace) -> None:
    """Lint every file under the given paths, optionally fixing them first.

    Exits with ``exit_codes.error`` on an unreadable file, a parse error or
    a config error, ``exit_codes.blocked`` when any blocking diagnostic
    remains and ``exit_codes.ok`` otherwise.
    """
    files = collect_files(args.paths)
    if not files:
        sys.stderr.write("  " + config.message("no_files") + "\n")
        sys.exit(config.get_int("exit_codes.ok"))

    had_error = False
    blocking = 0
    warnings = 0
    fixed = 0

    for path in files:
        try:
            source = _read_source(path)
        except OSError as exc:
            sys.stderr.write(
                "  " + config.message("file_read_error", filepath=path, error=exc) + "\n"
            )
            had_error = True
            continue

        try:
            if args.fix:
                new_source, applied = fix_source(source, path, args.config)
                if new_source != source:
                    with open(path, "w", encoding="utf-8", newline="") as fh:
                        fh.write(new_source)
                    source = new_source
                fixed += applied
            result = lint_source(source, path, args.config, output_format=args.format)
        except LintgateConfigError as exc:
            _fail(str(exc))
        except LintgateParseError as exc:
            sys.stderr.write(f"  {exc}\n")
            had_error = True
            continue

        blocking += result.blocking_count
        warnings += result.warning_count

    if args.format == config.get_str("formats.stderr"):
        totals = config.message(
            "check_totals",
            files=len(files),
            blocking=blocking,
            warnings=warnings,
            fixed=fixed,
        )
        sys.stderr.write(f"  {totals}\n")

    if had_error:
        sys.exit(config.get_int("exit_codes.error"))
    if blocking > 0:
        sys.exit(config.get_int("exit_codes.blocked"))
    sys.exit(config.get_int("exit_codes.ok"))


# -------------------------------------------------------------------------
# list-rules
# -------------------------------------------------------------------------


def cmd_list_rules(args: argparse.Namespace) -> None:
    """List every rule, or the resolved rules of one preset."""
    lint_home = _require_lint_home()

    if args.preset:
        preset_data = load_preset(args.preset, lint_home)
        if preset_data is None:
            _fail(config.message("preset_not_found", name=args.preset, path=lint_home))
        header = config.message("preset_rules_header", name=args.preset)
        print(_color(header, "bold"))
        for rule_obj in resolve_rules(preset_data, lint_home):
            _print_rule_line(rule_obj)
        return

    print(_color(config.message("all_rules_header"), "bold"))
    for rule_id in list_rule_ids(lint_home):
        rule_data = load_rule(rule_id, lint_home)
        if rule_data:
            _print_rule_line(build_rule_obj(rule_id, rule_data, {}))


# -------------------------------------------------------------------------
# init
# -------------------------------------------------------------------------


def cmd_init(args: argparse.Namespace) -> None:
    """Write a starter .lintgate.yaml into the current directory."""
    lint_home = _require_lint_home()
    target = Path.cwd() / config.get_str("filenames.project_config")

    if target.exists():
        print(_color(config.message("config_exists", path=target), "warning"))
        return

    if load_preset(args.preset, lint_home) is None:
        _fail(config.message(
            "unknown_preset",
            name=args.preset,
            available=", ".join(list_presets(lint_home)),
        ))

    dump_yaml(
        {
            "preset": args.preset,
            "rule_overrides": {},
            "overrides": {},
            "logging": {
                "enabled": False,
                "directory": config.get_str("defaults.log_directory"),
            },
        },
        target,
    )
    created = config.message("config_created", path=target, preset=args.preset)
    print(_color(created, "success"))


# -------------------------------------------------------------------------
# test-rule
# -------------------------------------------------------------------------


def cmd_test_rule(args: argparse.Namespace) -> None:
    """Run one rule against one file and print its diagnostics."""
    lint_home = _require_lint_home()

    rule_data = load_rule(args.rule_id, lint_home)
    if rule_data is None:
        _fail(config.message("rule_not_found", rule_id=args.rule_id, path=lint_home))

    try:
        source = _read_source(args.file)
    except OSError as exc:
        _fail(config.message("file_read_error", filepath=args.file, error=exc))

    try:
        source_file = SourceFile(source, args.file)
    except SyntaxError as exc:
        _fail(str(LintgateParseError(args.file, exc)))

    entry = {"options": args.options} if args.options else {}
    rule_obj = build_rule_obj(args.rule_id, rule_data, entry)
    diagnostics = [
        to_diagnostic(rule_obj, v)
        for v in run_check(rule_obj, source_file, lint_home)
    ]

    for diagnostic in diagnostics:
        sys.stderr.write(format_diagnostic_stderr(args.file, diagnostic) + "\n")

    if diagnostics:
        failed = config.message(
            "test_rule_failed", rule_id=args.rule_id, count=len(diagnostics)
        )
        print(_color(failed, "error"))
        sys.exit(config.get_int("exit_codes.blocked"))

    print(_color(config.message("test_rule_passed", rule_id=args.rule_id), "success"))
