"""Example custom check plugin: a module may be imported only once per file.

Referenced by ``rules/no-duplicate-imports.yaml``:

  check:
    type: "custom"
    plugin: "plugins/no_duplicate_imports.py"
    function: "check"

Plugin contract:
    def check(source_file: SourceFile, options: list[str]) -> list[dict]
    Each dict carries the keys produced by ``source_file.violation()``.
"""

from __future__ import annotations

from typing import Any


def check(source_file: Any, options: list[str]) -> list[dict[str, Any]]:
    """Report every top-level import of a module that was already imported.

    ``import type`` statements are tracked separately from value imports,
    since TypeScript allows both for the same module.

    Args:
        source_file: The parsed SourceFile.
        options: Unused.

    Returns:
        One violation dict per repeated import statement.
    """
    violations: list[dict[str, Any]] = []
    seen: set[tuple[str, bool]] = set()

    for node in source_file.statements:
        if node.type != "import_statement":
            continue
        specifier = node.child_by_field_name("source")
        if specifier is None:
            continue
        module = source_file.text(specifier)[1:-1]
        type_only = any(child.type == "type" for child in node.children)
        key = (module, type_only)
        if key in seen:
            violations.append(source_file.violation(
                node.start_byte,
                node.end_byte,
                f"'{module}' is imported more than once",
            ))
        seen.add(key)

    return violations
