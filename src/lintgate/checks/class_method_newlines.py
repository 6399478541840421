"""class-method-newlines — class methods must be preceded by an empty line.

The first member of a class and the members of an overload group (a method
that repeats the previous method's name) need exactly one line break before
them; every other method needs two.  Extra blank lines are tolerated when
the whitespace before the method holds a ``//`` or ``/**`` comment.
"""

from __future__ import annotations

from typing import Any, Optional

from tree_sitter import Node

from lintgate.lib import config
from lintgate.lib.models import Replacement
from lintgate.lib.source import COMMENT, SourceFile

CLASS_TYPES = ("class_declaration", "abstract_class_declaration", "class")
METHOD_TYPES = frozenset({
    "method_definition",
    "method_signature",
    "abstract_method_signature",
})
_NON_MEMBERS = frozenset({COMMENT, "decorator"})


def _member_start(member: Node) -> Node:
    """Return the first decorator placed before a member, or the member."""
    first = member
    prev = member.prev_sibling
    while prev is not None and prev.type == "decorator":
        first = prev
        prev = prev.prev_sibling
    return first


def _previous_token_end(source_file: SourceFile, node: Node) -> int:
    """Return where the whitespace in front of a member starts.

    Member separators (``;`` or ``,``) that the grammar keeps inside an
    invisible token count as part of the previous member.
    """
    prev = node.prev_sibling
    while prev is not None and prev.type == COMMENT:
        prev = prev.prev_sibling
    if prev is None:
        return node.start_byte
    end = prev.end_byte
    while end < node.start_byte and source_file.data[end:end + 1] in (b";", b","):
        end += 1
    return end


def _fix(gap_start: int, gap_end: int, leading: str, expected: int) -> Optional[Replacement]:
    """Build the fix for a method preceded by the wrong number of newlines."""
    newline = "\r\n" if "\r\n" in leading else "\n"
    count = leading.count("\n")
    if count < expected:
        return Replacement(gap_start, gap_start, newline * (expected - count))
    if leading.strip():
        return None
    indent = leading[leading.rfind("\n") + 1:]
    return Replacement(gap_start, gap_end, newline * expected + indent)


def check(source_file: SourceFile, options: Optional[list[str]] = None) -> list[dict[str, Any]]:
    """Check the blank lines in front of every class method.

    Args:
        source_file: The parsed file.
        options: Unused; the rule takes no options.

    Returns:
        One violation dict per badly spaced method, anchored at its name.
    """
    message = config.message("class_method_newlines")
    violations: list[dict[str, Any]] = []

    for class_node in source_file.iter_nodes(*CLASS_TYPES):
        body = class_node.child_by_field_name("body")
        if body is None:
            continue
        members = [c for c in body.named_children if c.type not in _NON_MEMBERS]
        methods = [m for m in members if m.type in METHOD_TYPES]

        for position, method in enumerate(methods):
            name_node = method.child_by_field_name("name")
            start_node = _member_start(method)
            gap_start = _previous_token_end(source_file, start_node)
            leading = source_file.slice(gap_start, start_node.start_byte)

            is_first_member = method.start_byte == members[0].start_byte
            in_overload_group = position > 0 and source_file.text(name_node) == (
                source_file.text(methods[position - 1].child_by_field_name("name"))
            )
            expected = 1 if is_first_member or in_overload_group else 2

            newline_count = leading.count("\n")
            has_comments = "//" in leading or "/**" in leading
            if newline_count < expected or (newline_count > expected and not has_comments):
                violations.append(source_file.violation(
                    name_node.start_byte,
                    name_node.end_byte,
                    message,
                    _fix(gap_start, start_node.start_byte, leading, expected),
                ))

    return violations
