"""Where Lintgate finds its bundled data.

Rules, presets and plugins live under a *lint home*.  By default that is the
installed package directory; pointing ``$LINTGATE_HOME`` at another directory
swaps in a different rule set without touching the package.  The defaults
file and the CLI theme always come from the package itself.

No other module computes paths from ``__file__``.
"""

from __future__ import annotations

import os
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parent

# config/ is looked up before defaults.yaml is readable, so it is not
# configurable.
_CONFIG_SUBDIR = "config"


def _setting(dotted_key: str) -> str:
    # Imported here: lib.config needs config_dir() at import time.
    from lintgate.lib import config

    return config.get_str(dotted_key)


def get_lint_home() -> Path:
    """Return ``$LINTGATE_HOME`` if it names a directory, else the package root."""
    override = os.environ.get(_setting("env_vars.lint_home"), "")
    if override and Path(override).is_dir():
        return Path(override)
    return PACKAGE_ROOT


def _home_subdir(name: str, lint_home: Path | None) -> Path:
    home = lint_home if lint_home is not None else get_lint_home()
    return home / _setting(f"directories.{name}")


def rules_dir(lint_home: Path | None = None) -> Path:
    """Directory of rule YAML files."""
    return _home_subdir("rules", lint_home)


def presets_dir(lint_home: Path | None = None) -> Path:
    """Directory of preset YAML files."""
    return _home_subdir("presets", lint_home)


def plugins_dir(lint_home: Path | None = None) -> Path:
    """Directory searched for custom check plugins."""
    return _home_subdir("plugins", lint_home)


def config_dir() -> Path:
    return PACKAGE_ROOT / _CONFIG_SUBDIR


def theme_path() -> Path:
    """Path of the CLI color theme, which always ships with the package."""
    return PACKAGE_ROOT / _setting("directories.cli") / _setting("filenames.theme")
