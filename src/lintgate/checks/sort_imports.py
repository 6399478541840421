"""sort-imports — keeps each contiguous run of top-level imports sorted.

A file's top-level statements are split into import groups: maximal runs of
import-like statements (``import ... from``, side-effect ``import 'x'`` and
``import X = require('x')``) with no other statement in between.  Each group
is sorted independently by a lowercase sort key; the first out-of-order
position produces one diagnostic whose fix rewrites the whole group in
canonical order.

Keys compare as plain strings, except that two side-effect imports (no
binding) always compare equal, so the stable sort keeps them in source order.
A mismatch that involves a side-effect import is not reported.

Options (``ruleArguments`` style list):
    whitespace-insensitive — collapse whitespace runs and a trailing
        ``, }`` before comparing, so multi-line named-import lists compare
        equal to their single-line spelling.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Optional

from tree_sitter import Node

from lintgate.lib import config
from lintgate.lib.fixes import detect_newline
from lintgate.lib.models import Replacement
from lintgate.lib.source import SourceFile

STANDARD_IMPORT = "standard-import"
REQUIRE_ALIAS = "require-alias"
OTHER = "other"

# "{" sorts after letters; "+" comes right after "*", which puts named
# imports between namespace and default imports.
_NAMED_OPENING = "import {"
_NAMED_SENTINEL = "import +"

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ImportStatement:
    """One import-like top-level statement.

    Attributes:
        kind: STANDARD_IMPORT or REQUIRE_ALIAS.
        text: Statement text without leading trivia.
        full_text: Statement text with leading trivia and trailing comment.
        trimmed_text: ``full_text`` stripped of surrounding whitespace.
        binding: Clause text, alias identifier, or (side-effect imports)
            the quoted module specifier.
        has_binding: False only for side-effect imports.
        start: Byte offset of the statement's first token.
        end: Byte offset where the statement ends.
        trimmed_start: Byte offset where ``trimmed_text`` starts.
        trimmed_end: Byte offset where ``trimmed_text`` ends.
        first_token_end: Byte offset where the ``import`` keyword ends.
    """

    kind: str
    text: str
    full_text: str
    trimmed_text: str
    binding: str
    has_binding: bool
    start: int
    end: int
    trimmed_start: int
    trimmed_end: int
    first_token_end: int

    @property
    def multiline(self) -> bool:
        """Whether the statement text spans more than one line."""
        return "\n" in self.text.strip()


@dataclass(frozen=True)
class GroupViolation:
    """The first out-of-order position of an import group."""

    index: int
    expected: ImportStatement
    actual: ImportStatement
    ordered: tuple[ImportStatement, ...]


# ---------------------------------------------------------------------------
# Statement classification
# ---------------------------------------------------------------------------


def _child_of_type(node: Node, node_type: str) -> Optional[Node]:
    for child in node.named_children:
        if child.type == node_type:
            return child
    return None


def classify_statement(node: Node) -> str:
    """Return STANDARD_IMPORT, REQUIRE_ALIAS or OTHER for a top-level node."""
    if node.type == "import_alias":
        return REQUIRE_ALIAS
    if node.type == "import_statement":
        if _child_of_type(node, "import_require_clause") is not None:
            return REQUIRE_ALIAS
        return STANDARD_IMPORT
    return OTHER


def _binding(source_file: SourceFile, node: Node, kind: str) -> tuple[str, bool]:
    if kind == REQUIRE_ALIAS:
        clause = _child_of_type(node, "import_require_clause") or node
        return source_file.text(_child_of_type(clause, "identifier")), True
    clause = _child_of_type(node, "import_clause")
    if clause is not None:
        return source_file.text(clause), True
    return source_file.text(node.child_by_field_name("source")), False


def describe_statement(source_file: SourceFile, index: int) -> ImportStatement:
    """Build the ImportStatement for the top-level statement at ``index``.

    Args:
        source_file: The parsed file.
        index: Position in ``source_file.statements``; the statement must be
            import-like.

    Returns:
        The statement's texts, binding descriptor and byte ranges.
    """
    node = source_file.statements[index]
    kind = classify_statement(node)
    binding, has_binding = _binding(source_file, node, kind)
    code_end = source_file.code_end(node)
    full_start, full_end = source_file.statement_span(index)
    trimmed_start, trimmed_end = source_file.trimmed_span(full_start, full_end)
    return ImportStatement(
        kind=kind,
        text=source_file.slice(node.start_byte, code_end),
        full_text=source_file.slice(full_start, full_end),
        trimmed_text=source_file.slice(trimmed_start, trimmed_end),
        binding=binding,
        has_binding=has_binding,
        start=node.start_byte,
        end=code_end,
        trimmed_start=trimmed_start,
        trimmed_end=trimmed_end,
        first_token_end=node.children[0].end_byte,
    )


# ---------------------------------------------------------------------------
# Group segmentation
# ---------------------------------------------------------------------------


def segment_groups(source_file: SourceFile) -> list[list[ImportStatement]]:
    """Split the top-level statements into non-empty import groups."""
    groups: list[list[ImportStatement]] = [[]]
    for index, node in enumerate(source_file.statements):
        if classify_statement(node) == OTHER:
            if groups[-1]:
                groups.append([])
        else:
            groups[-1].append(describe_statement(source_file, index))
    return [group for group in groups if group]


# ---------------------------------------------------------------------------
# Sort keys and ordering
# ---------------------------------------------------------------------------


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space and the first ', }' to ' }'."""
    return _WHITESPACE_RE.sub(" ", text).replace(", }", " }", 1)


def sort_key(statement: ImportStatement, whitespace_insensitive: bool = False) -> str:
    """Return the comparison key of an import statement (never displayed)."""
    key = statement.text.lower()
    if whitespace_insensitive:
        key = normalize_whitespace(key)
    return key.replace(_NAMED_OPENING, _NAMED_SENTINEL, 1)


def order_group(
    group: list[ImportStatement],
    whitespace_insensitive: bool = False,
) -> tuple[list[ImportStatement], Optional[GroupViolation]]:
    """Compute the canonical order of a group and its first violation.

    The sort is stable and compares keys lexicographically, except that any
    two side-effect imports compare equal.  A binding key that sorts below a
    quote (``import $ from``) therefore lands ahead of side-effect imports.
    Positions where the source and canonical keys differ are skipped when
    either statement is a side-effect import; the first remaining mismatch
    is the group's only violation.

    Args:
        group: A non-empty import group in source order.
        whitespace_insensitive: Normalise whitespace in the sort keys.

    Returns:
        Tuple of (canonical order, violation or None).
    """
    keys = [sort_key(statement, whitespace_insensitive) for statement in group]

    def compare(left: int, right: int) -> int:
        if not group[left].has_binding and not group[right].has_binding:
            return 0
        return (keys[left] > keys[right]) - (keys[left] < keys[right])

    order = sorted(range(len(group)), key=cmp_to_key(compare))
    ordered = [group[i] for i in order]

    for index, expected_index in enumerate(order):
        if keys[index] == keys[expected_index]:
            continue
        if not group[index].has_binding or not group[expected_index].has_binding:
            continue
        return ordered, GroupViolation(
            index=index,
            expected=group[expected_index],
            actual=group[index],
            ordered=tuple(ordered),
        )
    return ordered, None


# ---------------------------------------------------------------------------
# Fix and report
# ---------------------------------------------------------------------------


def synthesize_fix(
    group: list[ImportStatement],
    ordered: list[ImportStatement],
    newline: str,
) -> Replacement:
    """Build the replacement that rewrites a group in canonical order.

    The span runs from the first statement's leading comment (or first
    token) to the end of the last statement; each statement keeps its own
    text and only the joins between statements change.
    """
    return Replacement(
        start=group[0].trimmed_start,
        end=group[-1].trimmed_end,
        text=newline.join(statement.trimmed_text for statement in ordered),
    )


def report(
    source_file: SourceFile,
    violation: GroupViolation,
    fix: Optional[Replacement],
) -> dict[str, Any]:
    """Turn a group violation into a violation dict.

    Multi-line statements are reported on their first token only.
    """
    message = normalize_whitespace(config.message(
        "out_of_order_imports",
        expected=violation.expected.binding,
        actual=violation.actual.binding,
    ))
    actual = violation.actual
    end = actual.first_token_end if actual.multiline else actual.end
    return source_file.violation(actual.start, end, message, fix)


def check(source_file: SourceFile, options: Optional[list[str]] = None) -> list[dict[str, Any]]:
    """Report the first out-of-order import of every import group.

    Args:
        source_file: The parsed file.
        options: Rule options; see the module docstring.

    Returns:
        A list of violation dicts, at most one per import group.
    """
    whitespace_insensitive = (
        config.get_str("options.whitespace_insensitive") in (options or [])
    )
    violations: list[dict[str, Any]] = []
    newline: Optional[str] = None

    for group in segment_groups(source_file):
        ordered, violation = order_group(group, whitespace_insensitive)
        if violation is None:
            continue
        if newline is None:
            newline = detect_newline(source_file.source)
        violations.append(
            report(source_file, violation, synthesize_fix(group, ordered, newline))
        )

    return violations
