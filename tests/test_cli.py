"""Integration tests for lintgate.cli command dispatch."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import yaml


CLI_MODULE = "lintgate.cli.main"
PYTHON = sys.executable

UNSORTED = "import { b } from 'b';\nimport { a } from 'a';\n"
SORTED = "import { a } from 'a';\nimport { b } from 'b';\n"


def _run(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess:
    return subprocess.run(
        [PYTHON, "-m", CLI_MODULE, *args],
        capture_output=True,
        text=True,
        timeout=60,
        cwd=cwd,
    )


class TestCLIEntryPoint:
    """Tests for 'python -m lintgate.cli.main' dispatch."""

    def test_help_flag(self) -> None:
        """--help prints usage and exits 0."""
        result = _run("--help")
        assert result.returncode == 0
        assert "lintgate" in result.stdout.lower()

    def test_version_flag(self) -> None:
        """--version prints the version string."""
        result = _run("--version")
        assert result.returncode == 0
        assert "0.2.0" in result.stdout

    def test_no_command_prints_help(self) -> None:
        """Without a subcommand the help text is shown."""
        result = _run()
        assert result.returncode == 0
        assert "check" in result.stdout


class TestCheckCommand:
    """Tests for 'lintgate check'."""

    def test_clean_file(self, tmp_path) -> None:
        """A clean file exits 0."""
        target = tmp_path / "a.ts"
        target.write_text(SORTED)
        result = _run("check", str(target), cwd=tmp_path)
        assert result.returncode == 0
        assert "1 file(s) checked: 0 blocking" in result.stderr

    def test_blocking_file(self, tmp_path) -> None:
        """Blocking diagnostics exit 1."""
        target = tmp_path / "a.ts"
        target.write_text(UNSORTED)
        result = _run("check", str(target), cwd=tmp_path)
        assert result.returncode == 1
        assert "sort-imports" in result.stderr

    def test_directory_walk(self, tmp_path) -> None:
        """Directories are linted recursively."""
        src = tmp_path / "src"
        src.mkdir()
        (src / "a.ts").write_text(SORTED)
        (src / "b.tsx").write_text("const x = <b>{y}</b>;\n")
        result = _run("check", str(src), cwd=tmp_path)
        assert result.returncode == 1
        assert "2 file(s) checked" in result.stderr
        assert "jsx-expression-spacing" in result.stderr

    def test_fix_rewrites_file(self, tmp_path) -> None:
        """--fix writes the fixed source back and passes."""
        target = tmp_path / "a.ts"
        target.write_text(UNSORTED)
        result = _run("check", str(target), "--fix", cwd=tmp_path)
        assert result.returncode == 0
        assert target.read_text() == SORTED
        assert "1 fixed" in result.stderr

    def test_json_format(self, tmp_path) -> None:
        """--format json prints one JSON document per file."""
        target = tmp_path / "a.ts"
        target.write_text(UNSORTED)
        result = _run("check", str(target), "--format", "json", cwd=tmp_path)
        assert result.returncode == 1
        assert json.loads(result.stderr)["diagnostics"][0]["rule"] == "sort-imports"

    def test_syntax_error_exits_2(self, tmp_path) -> None:
        """An unparseable file exits 2."""
        target = tmp_path / "bad.ts"
        target.write_text("import { a from 'a';\n")
        result = _run("check", str(target), cwd=tmp_path)
        assert result.returncode == 2

    def test_missing_file_exits_2(self, tmp_path) -> None:
        """A file that cannot be read exits 2."""
        result = _run("check", str(tmp_path / "absent.ts"), cwd=tmp_path)
        assert result.returncode == 2

    def test_invalid_config_exits_2(self, tmp_path) -> None:
        """An invalid project config exits 2."""
        (tmp_path / ".lintgate.yaml").write_text("preset: [1, 2]\n")
        target = tmp_path / "a.ts"
        target.write_text(SORTED)
        result = _run("check", str(target), cwd=tmp_path)
        assert result.returncode == 2

    def test_empty_directory(self, tmp_path) -> None:
        """No lintable files is not an error."""
        result = _run("check", str(tmp_path), cwd=tmp_path)
        assert result.returncode == 0
        assert "No files to lint" in result.stderr


class TestListRules:
    """Tests for 'lintgate list-rules'."""

    def test_all_rules(self) -> None:
        """Every rule file is listed."""
        result = _run("list-rules")
        assert result.returncode == 0
        assert "sort-imports" in result.stdout
        assert "no-duplicate-imports" in result.stdout

    def test_preset_rules(self) -> None:
        """A preset lists its resolved rules only."""
        result = _run("list-rules", "--preset", "strict")
        assert result.returncode == 0
        assert "sort-imports" in result.stdout
        assert "no-duplicate-imports" not in result.stdout

    def test_unknown_preset(self) -> None:
        """An unknown preset exits 2."""
        result = _run("list-rules", "--preset", "nonexistent")
        assert result.returncode == 2


class TestInit:
    """Tests for 'lintgate init'."""

    def test_creates_config(self, tmp_path) -> None:
        """init writes a loadable .lintgate.yaml."""
        result = _run("init", "--preset", "strict", cwd=tmp_path)
        assert result.returncode == 0
        data = yaml.safe_load((tmp_path / ".lintgate.yaml").read_text())
        assert data["preset"] == "strict"
        assert data["logging"]["enabled"] is False

    def test_does_not_overwrite(self, tmp_path) -> None:
        """An existing config is left alone."""
        config_file = tmp_path / ".lintgate.yaml"
        config_file.write_text("preset: recommended\n")
        result = _run("init", "--preset", "strict", cwd=tmp_path)
        assert result.returncode == 0
        assert config_file.read_text() == "preset: recommended\n"
        assert "already exists" in result.stdout

    def test_unknown_preset(self, tmp_path) -> None:
        """An unknown preset exits 2 and writes nothing."""
        result = _run("init", "--preset", "nonexistent", cwd=tmp_path)
        assert result.returncode == 2
        assert not (tmp_path / ".lintgate.yaml").exists()


class TestTestRule:
    """Tests for 'lintgate test-rule'."""

    def test_rule_fails(self, tmp_path) -> None:
        """A violating file exits 1 and reports the count."""
        target = tmp_path / "a.ts"
        target.write_text(UNSORTED)
        result = _run("test-rule", "sort-imports", str(target))
        assert result.returncode == 1
        assert "reported 1 diagnostic(s)" in result.stdout

    def test_rule_passes(self, tmp_path) -> None:
        """A clean file exits 0."""
        target = tmp_path / "a.ts"
        target.write_text(SORTED)
        result = _run("test-rule", "sort-imports", str(target))
        assert result.returncode == 0
        assert "passed" in result.stdout

    def test_option_flag(self, tmp_path) -> None:
        """--option reaches the rule."""
        target = tmp_path / "a.ts"
        target.write_text("import {\n  b,\n} from 'b';\nimport { a } from 'a';\n")
        assert _run("test-rule", "sort-imports", str(target)).returncode == 0
        result = _run(
            "test-rule", "sort-imports", str(target), "--option", "whitespace-insensitive"
        )
        assert result.returncode == 1

    def test_unknown_rule(self, tmp_path) -> None:
        """An unknown rule exits 2."""
        target = tmp_path / "a.ts"
        target.write_text(SORTED)
        assert _run("test-rule", "no-such-rule", str(target)).returncode == 2
