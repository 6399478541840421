"""no-braces-for-single-line-arrow-functions — drop braces from one-liners.

An arrow function whose block body holds exactly one statement and fits on
one line should use a concise body: ``x => { return x + 1; }`` becomes
``x => x + 1``.  A fix is offered for expression statements and for
``return`` statements with a value; object literals and comma sequences are
wrapped in parentheses so the concise body keeps its meaning.
"""

from __future__ import annotations

from typing import Any, Optional

from tree_sitter import Node

from lintgate.lib import config
from lintgate.lib.models import Replacement
from lintgate.lib.source import COMMENT, SourceFile

_PARENTHESIZED = frozenset({"object", "sequence_expression"})


def _concise_body(source_file: SourceFile, statement: Node) -> Optional[str]:
    """Return the concise-body text for a statement, or None if there is none."""
    if statement.type not in ("return_statement", "expression_statement"):
        return None
    values = [c for c in statement.named_children if c.type != COMMENT]
    if not values:
        return None
    expression = values[0]
    text = source_file.text(expression)
    if expression.type in _PARENTHESIZED:
        text = f"({text})"
    return text


def check(source_file: SourceFile, options: Optional[list[str]] = None) -> list[dict[str, Any]]:
    """Report braced single-statement, single-line arrow function bodies.

    Args:
        source_file: The parsed file.
        options: Unused; the rule takes no options.

    Returns:
        One violation dict per offending body, spanning the braced block.
    """
    message = config.message("arrow_function_braces")
    violations: list[dict[str, Any]] = []

    for node in source_file.iter_nodes("arrow_function"):
        body = node.child_by_field_name("body")
        if body is None or body.type != "statement_block":
            continue
        named = body.named_children
        statements = [c for c in named if c.type != COMMENT]
        if len(statements) != 1:
            continue

        arrows = [c for c in node.children if c.type == "=>"]
        text_start = arrows[0].end_byte if arrows else body.start_byte
        if "\n" in source_file.slice(text_start, body.end_byte):
            continue

        fix = None
        if len(named) == 1:
            concise = _concise_body(source_file, statements[0])
            if concise is not None:
                fix = Replacement(body.start_byte, body.end_byte, concise)
        violations.append(
            source_file.violation(body.start_byte, body.end_byte, message, fix)
        )

    return violations
