"""SourceFile — single-parse view of a TypeScript / JavaScript source file.

Every Lintgate rule queries this object.  No rule parses raw source text.
Each file is parsed exactly once with tree-sitter; the grammar (TypeScript or
TSX) is picked from the file extension.  Offsets handed to rules are byte
offsets into the UTF-8 encoded source, the unit tree-sitter itself uses, and
``position()`` maps them back to 1-based line / column pairs for reporting.

Design notes:
    tree-sitter keeps comments as ordinary sibling nodes instead of attaching
    them to the following token.  ``statement_span()`` rebuilds the
    "leading trivia" view of a top-level statement: everything after the
    previous statement up to the statement itself belongs to it, except a
    comment that starts on the line where the previous statement ends, which
    stays with that previous statement as its trailing comment.
"""

from __future__ import annotations

import os
from typing import Any, Iterator, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from lintgate.lib import config
from lintgate.lib.models import Replacement

COMMENT = "comment"
TRIVIA_TYPES = frozenset({COMMENT, "hash_bang_line"})

_LANGUAGES: dict[str, Language] = {}


# ---------------------------------------------------------------------------
# Grammar selection
# ---------------------------------------------------------------------------


def language_for_path(filepath: str) -> str:
    """Return the grammar name ('typescript' or 'tsx') for a file path.

    JSX-capable extensions get the TSX grammar; everything else, including
    unknown extensions, is parsed as TypeScript.
    """
    ext = os.path.splitext(filepath)[1].lower()
    if ext in config.get_list("extensions.tsx"):
        return config.get_str("languages.tsx")
    return config.get_str("languages.typescript")


def _language(name: str) -> Language:
    """Return the cached tree-sitter Language for a grammar name."""
    if name not in _LANGUAGES:
        if name == config.get_str("languages.tsx"):
            _LANGUAGES[name] = Language(tree_sitter_typescript.language_tsx())
        else:
            _LANGUAGES[name] = Language(tree_sitter_typescript.language_typescript())
    return _LANGUAGES[name]


def _first_error(root: Node) -> Node:
    """Return the first ERROR or MISSING node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(
            reversed([c for c in node.children if c.has_error or c.is_missing])
        )
    return root


# ---------------------------------------------------------------------------
# SourceFile
# ---------------------------------------------------------------------------


class SourceFile:
    """Single tree-sitter parse of a TypeScript / JavaScript source file.

    Created once per file in ``lint_source()`` and shared by every rule.

    Attributes:
        source: Raw source text of the file.
        filepath: Path used for grammar selection and reporting.
        data: The source encoded as UTF-8 (all offsets index into this).
        language: Grammar name used for the parse.
        tree: The tree-sitter Tree.
        root: The ``program`` root node.
        statements: Top-level statements in order (comments and the
            hashbang line excluded).

    Raises:
        SyntaxError: If the tree contains an ERROR or MISSING node.
    """

    def __init__(self, source: str, filepath: str) -> None:
        """Parse source with the grammar matching ``filepath``."""
        self.source = source
        self.filepath = filepath
        self.data = source.encode("utf-8")
        self.language = language_for_path(filepath)
        self.tree = Parser(_language(self.language)).parse(self.data)
        self.root = self.tree.root_node
        if self.root.has_error:
            line, column = self.position(_first_error(self.root).start_byte)
            raise SyntaxError(config.message("syntax_error", line=line, column=column))
        self.statements: list[Node] = [
            child for child in self.root.named_children
            if child.type not in TRIVIA_TYPES
        ]

    # ------------------------------------------------------------------
    # Text access
    # ------------------------------------------------------------------

    def text(self, node: Node) -> str:
        """Return the exact source text of a node (no surrounding trivia)."""
        return self.slice(node.start_byte, node.end_byte)

    def slice(self, start: int, end: int) -> str:
        """Return the source text between two byte offsets."""
        return self.data[start:end].decode("utf-8")

    @staticmethod
    def code_end(node: Node) -> int:
        """Return where a node's last non-comment child ends.

        A statement without a terminating semicolon can swallow a comment on
        its own line; that comment is trivia, not statement text.
        """
        for child in reversed(node.children):
            if child.type != COMMENT:
                return child.end_byte
        return node.end_byte

    def line_count(self) -> int:
        """Return the number of lines in the source."""
        return len(self.source.splitlines())

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def position(self, offset: int) -> tuple[int, int]:
        """Map a byte offset to a 1-based (line, column) pair."""
        line_start = self.data.rfind(b"\n", 0, offset) + 1
        line = self.data.count(b"\n", 0, offset) + 1
        return line, offset - line_start + 1

    def line_text(self, offset: int) -> str:
        """Return the full text of the line containing a byte offset."""
        line_start = self.data.rfind(b"\n", 0, offset) + 1
        line_end = self.data.find(b"\n", offset)
        if line_end < 0:
            line_end = len(self.data)
        return self.slice(line_start, line_end).rstrip("\r")

    def violation(
        self,
        start: int,
        end: int,
        message: str,
        fix: Optional[Replacement] = None,
    ) -> dict[str, Any]:
        """Build a violation dict for a byte range.

        Args:
            start: Byte offset of the reported range start.
            end: Byte offset of the reported range end.
            message: Human-readable message.
            fix: Optional automatic fix.

        Returns:
            Violation dict in the check contract shape.
        """
        line, column = self.position(start)
        return {
            "line": line,
            "column": column,
            "start": start,
            "end": end,
            "source": self.line_text(start),
            "message": message,
            "fix": fix,
        }

    # ------------------------------------------------------------------
    # Top-level statement trivia
    # ------------------------------------------------------------------

    def statement_span(self, index: int) -> tuple[int, int]:
        """Return the (start, end) byte span of a statement with its trivia.

        The span starts right after the previous statement (or its trailing
        comment, or the hashbang line, or the start of file) and ends after
        the statement's own trailing same-line comments.
        """
        node = self.statements[index]
        return self._leading_boundary(node), self._trailing_boundary(node)

    def trimmed_span(self, start: int, end: int) -> tuple[int, int]:
        """Shrink a byte span so it excludes surrounding whitespace."""
        raw = self.data[start:end]
        return (
            start + len(raw) - len(raw.lstrip()),
            end - (len(raw) - len(raw.rstrip())),
        )

    @staticmethod
    def _leading_boundary(node: Node) -> int:
        prev = node.prev_sibling
        comments: list[Node] = []
        while prev is not None and prev.type == COMMENT:
            comments.append(prev)
            prev = prev.prev_sibling
        if prev is None:
            return 0
        boundary = prev.end_byte
        owner_row = prev.end_point[0]
        for comment in reversed(comments):
            if comment.start_point[0] != owner_row:
                break
            boundary = comment.end_byte
        return boundary

    @staticmethod
    def _trailing_boundary(node: Node) -> int:
        end = node.end_byte
        row = node.end_point[0]
        nxt = node.next_sibling
        while nxt is not None and nxt.type == COMMENT and nxt.start_point[0] == row:
            end = nxt.end_byte
            nxt = nxt.next_sibling
        return end

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def iter_nodes(self, *types: str) -> Iterator[Node]:
        """Yield every named node of the given types in document (pre-)order."""
        wanted = frozenset(types)
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.is_named and node.type in wanted:
                yield node
            stack.extend(reversed(node.children))
