"""config — Lintgate's package defaults, read once from ``config/defaults.yaml``.

The defaults file is the only place that spells out status and severity
names, exit codes, output formats, file extensions and every message shown to
the user.  Code looks values up by dotted key (``"exit_codes.blocked"``) and
never hard-codes them.

The typed getters raise ``TypeError`` naming the key when the file holds a
value of the wrong type, and ``message()`` fills a template from the
``messages`` table.  The parsed file is cached for the life of the process;
``reset()`` drops the cache between tests.
"""

from __future__ import annotations

from typing import Any

import yaml

from lintgate._paths import config_dir

_DEFAULTS_FILE = "defaults.yaml"

_cache: dict[str, Any] | None = None


def load_defaults() -> dict[str, Any]:
    """Return the parsed defaults file, reading it on first use.

    Raises:
        FileNotFoundError: If the defaults file is missing.
        yaml.YAMLError: If it is not valid YAML.
        TypeError: If its top level is not a mapping.
    """
    global _cache  # noqa: PLW0603
    if _cache is not None:
        return _cache
    path = config_dir() / _DEFAULTS_FILE
    with open(path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if not isinstance(data, dict):
        msg = f"{path.name} must hold a YAML mapping, got {type(data).__name__}"
        raise TypeError(msg)
    _cache = data
    return data


def get(dotted_key: str) -> Any:
    """Look up a value by dotted key, e.g. ``"severities.block"``.

    Raises:
        KeyError: If a segment is missing or descends into a scalar.
    """
    node: Any = load_defaults()
    for segment in dotted_key.split("."):
        if not isinstance(node, dict) or segment not in node:
            msg = f"Config key not found: {dotted_key!r} (missing segment: {segment!r})"
            raise KeyError(msg)
        node = node[segment]
    return node


def _typed(dotted_key: str, kind: type, label: str) -> Any:
    value = get(dotted_key)
    # bool is an int subclass; a YAML true is never an exit code.
    if (isinstance(value, bool) and kind is not bool) or not isinstance(value, kind):
        msg = f"Expected {label} for {dotted_key!r}, got {type(value).__name__}"
        raise TypeError(msg)
    return value


def get_str(dotted_key: str) -> str:
    """Return a string value; TypeError for anything else."""
    return _typed(dotted_key, str, "str")


def get_int(dotted_key: str) -> int:
    """Return an integer value; TypeError for anything else, booleans included."""
    return _typed(dotted_key, int, "int")


def get_bool(dotted_key: str) -> bool:
    """Return a boolean value; TypeError for anything else."""
    return _typed(dotted_key, bool, "bool")


def get_list(dotted_key: str) -> list[Any]:
    """Return a list value; TypeError for anything else."""
    return _typed(dotted_key, list, "list")


def message(name: str, /, **fields: Any) -> str:
    """Fill the ``messages.<name>`` template with ``fields``.

    ``name`` is positional-only, so templates may use a ``{name}`` field.
    Literal braces in a template are written doubled.

    Raises:
        KeyError: If the template is missing or names a field not given.
    """
    return get_str(f"messages.{name}").format(**fields)


def reset() -> None:
    """Drop the cached defaults (tests only)."""
    global _cache  # noqa: PLW0603
    _cache = None
