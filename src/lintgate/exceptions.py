"""Exceptions raised by Lintgate.

All three are re-exported from the top-level ``lintgate`` package.

    LintgateParseError: a source file has no error-free tree-sitter parse.
    LintgateConfigError: a ``.lintgate.yaml`` is malformed or has the wrong
        shape.
    PluginError: a custom check plugin could not be loaded or raised.

Rule checks themselves never raise for bad input: they report violations.
"""

from __future__ import annotations

from lintgate.lib import config


class LintgateParseError(Exception):
    """A file could not be parsed, so no rule can run on it.

    Attributes:
        filepath: The file that failed to parse.
        original_error: The ``SyntaxError`` (or other error) from parsing.
    """

    def __init__(self, filepath: str, original_error: Exception) -> None:
        self.filepath = filepath
        self.original_error = original_error
        super().__init__(
            config.message("parse_error", filepath=filepath, error=original_error)
        )


class LintgateConfigError(Exception):
    """A project config is unusable.

    Attributes:
        filepath: The config file.
        errors: Every problem found, in discovery order.
    """

    def __init__(self, filepath: str, errors: list[str]) -> None:
        self.filepath = filepath
        self.errors = list(errors)
        super().__init__(
            config.message("config_error", filepath=filepath, errors="; ".join(errors))
        )


class PluginError(Exception):
    """A custom check plugin failed while loading or running.

    The engine never lets this escape a lint run; ``check_custom`` turns it
    into a violation at the top of the file.
    """

    def __init__(
        self, plugin_path: str, rule_id: str, original_error: Exception
    ) -> None:
        self.plugin_path = plugin_path
        self.rule_id = rule_id
        self.original_error = original_error
        super().__init__(
            config.message("plugin_error", rule_id=rule_id, error=original_error)
        )
