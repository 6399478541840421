"""Unit tests for lintgate.lib.theme ANSI colourisation."""

from __future__ import annotations

import io

from lintgate.lib.theme import Theme, code, colorize


class _TtyStream(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestTheme:
    """Tests for the Theme class."""

    def test_colorize_with_non_tty_stream(self):
        """Non-TTY stream gets the text unchanged."""
        assert colorize("hello", "error", stream=io.StringIO()) == "hello"

    def test_code_empty_off_tty(self):
        """code returns '' when the stream is not a TTY."""
        assert code("error", stream=io.StringIO()) == ""

    def test_colorize_on_tty(self):
        """A TTY stream gets the role's escape code and a reset."""
        result = colorize("hello", "error", stream=_TtyStream())
        assert result.startswith("\x1b[")
        assert "hello" in result
        assert result.endswith("\x1b[0m")

    def test_unknown_role_is_plain(self):
        """An unknown role leaves the text alone even on a TTY."""
        assert colorize("hello", "no-such-role", stream=_TtyStream()) == "hello"

    def test_lazy_loading(self):
        """Theme data is loaded on first use, not at construction."""
        theme = Theme()
        assert theme._resolved is None
        _ = theme.resolved
        assert theme._resolved is not None

    def test_roles_resolved(self):
        """Every role used by the formatter resolves to a code."""
        resolved = Theme().resolved
        for role in ("error", "warning", "location", "rule_id", "caret", "reset"):
            assert resolved.get(role)
