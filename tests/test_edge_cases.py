"""Edge-case tests for Lintgate boundary conditions."""

from __future__ import annotations

from pathlib import Path

import pytest

from lintgate.engine import fix_source, lint_source
from lintgate.exceptions import LintgateParseError
from lintgate.lib.formatter import caret_span, format_diagnostics_json, format_summary_stderr
from lintgate.lib.source import SourceFile


FIXTURES_DIR = Path(__file__).parent / "fixtures"
EDGE_DIR = FIXTURES_DIR / "edge_cases"


def _read(name: str) -> str:
    with open(EDGE_DIR / name, "r", encoding="utf-8", newline="") as fh:
        return fh.read()


class TestEmptyFile:
    """Engine behaviour on empty and trivia-only files."""

    def test_empty_source_string(self, config_path: str) -> None:
        """An empty string passes."""
        result = lint_source("", "empty.ts", config_path)
        assert result.status == "passed"
        assert result.preset_name == "recommended"

    def test_empty_file_fixture(self, config_path: str) -> None:
        """The empty_file.ts fixture passes."""
        result = lint_source(_read("empty_file.ts"), "empty_file.ts", config_path)
        assert result.diagnostics == []

    def test_comments_only(self, config_path: str) -> None:
        """A file holding only comments passes."""
        result = lint_source("// a\n/* b */\n", "c.ts", config_path)
        assert result.diagnostics == []


class TestUnicodeSource:
    """Non-ASCII source and byte offsets."""

    def test_unicode_fixture_passes(self, config_path: str) -> None:
        """Sorted imports with non-ASCII names pass."""
        result = lint_source(_read("unicode_imports.ts"), "src/u.ts", config_path)
        assert result.diagnostics == []

    def test_unicode_fix(self, config_path: str) -> None:
        """Fixes splice correctly around multi-byte characters."""
        source = "import { ändern } from './ändern';\nimport { Büro } from './büro';\n"
        result = lint_source(source, "src/u.ts", config_path, output_format="quiet", fix=True)
        diagnostic = result.diagnostics[0]
        assert diagnostic.message == (
            "out-of-order imports: expected '{ Büro }' but saw '{ ändern }'"
        )
        assert result.fixed_source == (
            "import { Büro } from './büro';\nimport { ändern } from './ändern';\n"
        )

    def test_caret_on_multibyte_line(self, config_path: str) -> None:
        """The caret covers the whole first statement in characters."""
        source = "import { ändern } from './ändern';\nimport { Büro } from './büro';\n"
        result = lint_source(source, "src/u.ts", config_path, output_format="quiet")
        offset, width = caret_span(result.diagnostics[0])
        assert (offset, width) == (0, len("import { ändern } from './ändern';"))


class TestLayout:
    """Line endings, hashbangs and missing final newlines."""

    def test_crlf_file_fix(self, config_path: str) -> None:
        """CRLF files stay CRLF after fixing."""
        source = "import { b } from 'b';\r\nimport { a } from 'a';\r\n"
        fixed, total = fix_source(source, "src/a.ts", config_path)
        assert total == 1
        assert fixed == "import { a } from 'a';\r\nimport { b } from 'b';\r\n"

    def test_hashbang_file_fix(self, config_path: str) -> None:
        """The hashbang line stays first."""
        source = "#!/usr/bin/env node\nimport b from 'b';\nimport a from 'a';\n"
        fixed, _ = fix_source(source, "bin/cli.ts", config_path)
        assert fixed == "#!/usr/bin/env node\nimport a from 'a';\nimport b from 'b';\n"

    def test_no_final_newline(self, config_path: str) -> None:
        """A file without a final newline is fixed without gaining one."""
        fixed, _ = fix_source("import b from 'b';\nimport a from 'a';", "src/a.ts", config_path)
        assert fixed == "import a from 'a';\nimport b from 'b';"

    def test_js_extension_uses_tsx_grammar(self) -> None:
        """JSX in a .js file parses."""
        source_file = SourceFile("const a = <b>{ c }</b>;\n", "a.js")
        assert source_file.language == "tsx"


class TestSyntaxError:
    """Unparseable input."""

    def test_fixture_raises(self, config_path: str) -> None:
        """The syntax_error.ts fixture raises LintgateParseError."""
        with pytest.raises(LintgateParseError) as excinfo:
            lint_source(_read("syntax_error.ts"), "bad.ts", config_path)
        assert isinstance(excinfo.value.original_error, SyntaxError)


class TestFormatterEdges:
    """Formatter output with nothing to report."""

    def test_zero_diagnostics_summary(self) -> None:
        """The summary renders with zero counts."""
        result = format_summary_stderr("recommended", "1.0.0", 0, 0)
        assert "0 blocking" in result

    def test_empty_json(self) -> None:
        """No diagnostics produce a passed JSON document."""
        result = format_diagnostics_json("ok.ts", [], "recommended", "1.0.0", 0)
        assert result["status"] == "passed"
        assert result["diagnostics"] == []
