"""Reading and writing the YAML files Lintgate works with.

Rules, presets, project configs and the CLI theme all go through
``load_yaml``; ``lintgate init`` writes its starter config with
``dump_yaml``.  Loading always uses PyYAML's ``safe_load``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

import yaml

PathLike = Union[str, Path]


def load_yaml(path: PathLike) -> Any:
    """Parse one YAML document from ``path``.

    An empty file parses to None; callers decide what that means.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file contains invalid YAML.
    """
    return yaml.safe_load(Path(path).read_text(encoding="utf-8"))


def dump_yaml(data: dict[str, Any], path: PathLike) -> None:
    """Write ``data`` as block-style YAML, keys in insertion order."""
    text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    Path(path).write_text(text, encoding="utf-8")
