"""theme — terminal colours for CLI and stderr output.

``cli/theme.yaml`` names escape sequences under ``ansi`` and points each
output role (``error``, ``location``, ``caret`` ...) at one of them under
``roles``.  Colour is applied only when the destination stream is a
terminal, so redirected output and test captures stay plain.
"""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

from lintgate._paths import theme_path
from lintgate.lib.yaml_loader import load_yaml

# Escape names usable as roles without a ``roles`` entry.
_DIRECT_ROLES = ("bold", "dim", "reset")


def _wants_color(stream: Optional[TextIO]) -> bool:
    isatty = getattr(stream if stream is not None else sys.stderr, "isatty", None)
    return bool(isatty and isatty())


class Theme:
    """Escape codes by role, read from the theme file on first access."""

    def __init__(self) -> None:
        self._resolved: Optional[dict[str, str]] = None

    @property
    def resolved(self) -> dict[str, str]:
        """Role name to escape sequence; empty if the theme file is absent."""
        if self._resolved is None:
            self._resolved = self._read_theme()
        return self._resolved

    @staticmethod
    def _read_theme() -> dict[str, str]:
        path = theme_path()
        data: dict[str, Any] = (load_yaml(path) or {}) if path.is_file() else {}
        escapes = data.get("ansi") or {}
        table = {name: escapes.get(name, "") for name in _DIRECT_ROLES}
        for role, escape_name in (data.get("roles") or {}).items():
            table[role] = escapes.get(escape_name, "")
        return table

    def code(self, role: str, *, stream: Optional[TextIO] = None) -> str:
        """Escape sequence for ``role``, or '' when ``stream`` is no terminal."""
        return self.resolved.get(role, "") if _wants_color(stream) else ""

    def colorize(self, text: str, role: str, *, stream: Optional[TextIO] = None) -> str:
        """Wrap ``text`` in the role's colour and a reset.

        ``stream`` defaults to ``sys.stderr``.  Unknown roles and
        non-terminal streams return the text untouched.
        """
        start = self.code(role, stream=stream)
        return f"{start}{text}{self.resolved.get('reset', '')}" if start else text


_theme = Theme()


def colorize(text: str, role: str, *, stream: Optional[TextIO] = None) -> str:
    return _theme.colorize(text, role, stream=stream)


def code(role: str, *, stream: Optional[TextIO] = None) -> str:
    return _theme.code(role, stream=stream)
