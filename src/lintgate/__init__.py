"""Lintgate — lint rules with automatic fixes for TypeScript and JavaScript.

Stable public API (semver-protected):
    lint_source: Lint a TypeScript/JavaScript source string against a preset.
    LintResult: Dataclass returned by lint_source.
    Diagnostic: Dataclass for individual rule diagnostics.
    Replacement: Dataclass for a single text replacement (an auto-fix).
    apply_replacements: Apply non-overlapping replacements to a source string.
    LintgateParseError: Exception raised when a file cannot be parsed.
    LintgateConfigError: Exception raised for an invalid project config.
    PluginError: Exception raised when a custom check plugin fails.
"""

__version__ = "0.2.0"

from lintgate.exceptions import LintgateConfigError, LintgateParseError, PluginError
from lintgate.lib.fixes import apply_replacements
from lintgate.lib.models import Diagnostic, Replacement

__all__ = [
    "__version__",
    "lint_source",
    "LintResult",
    "Diagnostic",
    "Replacement",
    "apply_replacements",
    "LintgateParseError",
    "LintgateConfigError",
    "PluginError",
]


def __getattr__(name: str):
    # The engine loads on first use so ``python -m lintgate.engine`` does not
    # find itself already imported.
    if name in ("lint_source", "LintResult"):
        from lintgate import engine

        return getattr(engine, name)
    raise AttributeError(f"module 'lintgate' has no attribute {name!r}")
