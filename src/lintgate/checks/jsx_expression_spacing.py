"""jsx-expression-spacing — one space inside JSX expression braces.

``{ value }`` passes; ``{value}`` and ``{  value }`` do not.  A line break
right after ``{`` (or right before ``}``) is also accepted, so multi-line
expressions are left alone.  Empty expressions, comment-only expressions and
spread attributes are not checked.
"""

from __future__ import annotations

from typing import Any, Optional

from lintgate.lib import config
from lintgate.lib.models import Replacement
from lintgate.lib.source import COMMENT, SourceFile

_SKIPPED_VALUES = frozenset({COMMENT, "spread_element"})


def _is_valid_gap(gap: str) -> bool:
    """A gap is one character wide or starts with a line break."""
    return len(gap) == 1 or gap[:1] in ("\r", "\n")


def check(source_file: SourceFile, options: Optional[list[str]] = None) -> list[dict[str, Any]]:
    """Check the spacing inside every JSX expression.

    Args:
        source_file: The parsed file (only the TSX grammar yields JSX).
        options: Unused; the rule takes no options.

    Returns:
        Violation dicts spanning the whole expression, one per bad side.
    """
    after_open = config.message("jsx_space_after_open")
    before_close = config.message("jsx_space_before_close")
    violations: list[dict[str, Any]] = []

    for node in source_file.iter_nodes("jsx_expression"):
        children = node.children
        if len(children) != 3 or children[2].type != "}":
            continue
        opening, value, closing = children
        if value.type in _SKIPPED_VALUES:
            continue

        gaps = (
            (opening.end_byte, value.start_byte, after_open),
            (value.end_byte, closing.start_byte, before_close),
        )
        for gap_start, gap_end, message in gaps:
            if _is_valid_gap(source_file.slice(gap_start, gap_end)):
                continue
            violations.append(source_file.violation(
                node.start_byte,
                node.end_byte,
                message,
                Replacement(gap_start, gap_end, " "),
            ))

    return violations
