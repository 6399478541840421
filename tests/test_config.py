"""Unit tests for lintgate.lib.config defaults accessor."""

from __future__ import annotations

import string

import pytest

from lintgate.lib import config


class TestLoadDefaults:
    """Tests for config loading and caching."""

    def test_loads_successfully(self) -> None:
        """defaults.yaml loads without error."""
        data = config.load_defaults()
        assert isinstance(data, dict)

    def test_cached_on_second_call(self) -> None:
        """Second call returns the same dict object (cached)."""
        first = config.load_defaults()
        second = config.load_defaults()
        assert first is second

    def test_reset_clears_cache(self) -> None:
        """reset() forces a fresh load on next call."""
        first = config.load_defaults()
        config.reset()
        second = config.load_defaults()
        assert first is not second
        assert first == second


class TestGet:
    """Tests for the dot-notation accessor."""

    def test_top_level_key(self) -> None:
        """Access a top-level mapping."""
        assert isinstance(config.get("severities"), dict)

    def test_nested_key(self) -> None:
        """Access a nested value."""
        assert config.get("statuses.rejected") == "rejected"

    def test_off_severity_stays_a_string(self) -> None:
        """The quoted 'off' key is not turned into a boolean."""
        assert config.get("severities.off") == "off"

    def test_missing_key_raises(self) -> None:
        """Missing key raises KeyError naming the segment."""
        with pytest.raises(KeyError, match="nonexistent"):
            config.get("nonexistent.key")

    def test_path_through_scalar_raises(self) -> None:
        """Descending into a scalar raises KeyError."""
        with pytest.raises(KeyError):
            config.get("statuses.passed.deeper")


class TestTypedAccessors:
    """Tests for get_str, get_int, get_list."""

    def test_get_str(self) -> None:
        """get_str returns the message template."""
        template = config.get_str("messages.out_of_order_imports")
        assert "{expected}" in template
        assert "{actual}" in template

    def test_get_str_wrong_type(self) -> None:
        """get_str raises TypeError when value is not a string."""
        with pytest.raises(TypeError, match="Expected str"):
            config.get_str("statuses")

    def test_get_int(self) -> None:
        """get_int returns the configured exit codes."""
        assert config.get_int("exit_codes.ok") == 0
        assert config.get_int("exit_codes.blocked") == 1
        assert config.get_int("exit_codes.error") == 2

    def test_get_int_wrong_type(self) -> None:
        """get_int raises TypeError when value is not an int."""
        with pytest.raises(TypeError, match="Expected int"):
            config.get_int("statuses.passed")

    def test_get_list(self) -> None:
        """get_list returns the extension lists."""
        assert ".tsx" in config.get_list("extensions.tsx")
        assert ".ts" in config.get_list("extensions.typescript")

    def test_get_list_wrong_type(self) -> None:
        """get_list raises TypeError when value is not a list."""
        with pytest.raises(TypeError, match="Expected list"):
            config.get_list("statuses.passed")


class TestMessage:
    """Tests for filling message templates."""

    def test_fills_fields(self) -> None:
        """Fields are substituted into the template."""
        assert config.message("out_of_order_imports", expected="a", actual="b") == (
            "out-of-order imports: expected 'a' but saw 'b'"
        )

    def test_literal_braces(self) -> None:
        """Doubled braces in a template render as single braces."""
        assert config.message("jsx_space_after_open").endswith("opening '{'")
        assert config.message("jsx_space_before_close").endswith("closing '}'")

    def test_name_field_allowed(self) -> None:
        """A template may use a field called name."""
        assert config.message("preset_rules_header", name="strict") == (
            "Rules in preset 'strict':"
        )

    @pytest.mark.parametrize("key", sorted(config.get("messages")))
    def test_every_template_formats(self, key: str) -> None:
        """Every template is a valid format string."""
        fields = {
            field: "x"
            for _, field, _, _ in string.Formatter().parse(config.get_str(f"messages.{key}"))
            if field
        }
        config.message(key, **fields)
