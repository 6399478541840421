"""Shared fixtures for the Lintgate test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pytest
import yaml


FIXTURES_DIR = Path(__file__).parent / "fixtures"
PASSING_DIR = FIXTURES_DIR / "passing"
FAILING_DIR = FIXTURES_DIR / "failing"
EDGE_CASES_DIR = FIXTURES_DIR / "edge_cases"


def read_fixture(path: Path) -> str:
    """Read a fixture file without newline translation."""
    with open(path, "r", encoding="utf-8", newline="") as fh:
        return fh.read()


def write_project_config(directory: Path, data: dict[str, Any]) -> Path:
    """Write a .lintgate.yaml into ``directory`` and return its path."""
    config_file = directory / ".lintgate.yaml"
    with open(config_file, "w", encoding="utf-8") as fh:
        yaml.dump(data, fh, default_flow_style=False)
    return config_file


@pytest.fixture()
def lint_home() -> Path:
    """Return the lint home directory (package root)."""
    from lintgate._paths import get_lint_home

    return get_lint_home()


@pytest.fixture()
def tmp_project(tmp_path: Path) -> Path:
    """Create a temporary project directory with a .lintgate.yaml."""
    write_project_config(tmp_path, {
        "preset": "recommended",
        "rule_overrides": {},
        "logging": {"enabled": False},
    })
    return tmp_path


@pytest.fixture()
def config_path(tmp_project: Path) -> str:
    """Return the path of the temporary project's .lintgate.yaml."""
    return str(tmp_project / ".lintgate.yaml")


@pytest.fixture()
def parse():
    """Return a helper that parses source text into a SourceFile."""
    from lintgate.lib.source import SourceFile

    def _parse(source: str, filepath: str = "test.ts") -> SourceFile:
        return SourceFile(source, filepath)

    return _parse


@pytest.fixture()
def apply_fix():
    """Return a helper that applies a violation's fix to a source string."""
    from lintgate.lib.fixes import apply_replacements

    def _apply(source: str, violation: dict[str, Any]) -> Optional[str]:
        if violation.get("fix") is None:
            return None
        fixed, _ = apply_replacements(source, [violation["fix"]])
        return fixed

    return _apply


@pytest.fixture()
def passing_source() -> str:
    """Return the contents of the clean TypeScript module fixture."""
    return read_fixture(PASSING_DIR / "clean_module.ts")


@pytest.fixture()
def passing_component_source() -> str:
    """Return the contents of the clean TSX component fixture."""
    return read_fixture(PASSING_DIR / "clean_component.tsx")


@pytest.fixture()
def unsorted_imports_source() -> str:
    """Return source whose import group is out of order."""
    return read_fixture(FAILING_DIR / "unsorted_imports.ts")


@pytest.fixture()
def class_methods_source() -> str:
    """Return source with badly spaced class methods."""
    return read_fixture(FAILING_DIR / "class_methods.ts")


@pytest.fixture()
def jsx_spacing_source() -> str:
    """Return TSX source with badly spaced JSX expressions."""
    return read_fixture(FAILING_DIR / "jsx_spacing.tsx")


@pytest.fixture()
def arrow_braces_source() -> str:
    """Return source with braced single-line arrow functions."""
    return read_fixture(FAILING_DIR / "arrow_braces.ts")
