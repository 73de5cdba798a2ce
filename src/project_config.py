"""Load ``config.toml`` and hand out sections of it.

The file at the repository root is used unless ``QUEENS_CONFIG`` names another
one. Without the root file (an installed wheel, for instance) every module
runs on its built-in defaults. Values are cached until :func:`reload`.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]


CONFIG_ENV_VAR = "QUEENS_CONFIG"
_DEFAULT_PATH = Path(__file__).resolve().parents[1] / "config.toml"


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    return Path(override) if override else _DEFAULT_PATH


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    path = config_path()
    if not path.is_file():
        if path != _DEFAULT_PATH:
            raise RuntimeError(f"{CONFIG_ENV_VAR} points at a missing file: {path}")
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


def reload() -> None:
    """Forget the cached file so the next lookup reads it again."""

    get_config.cache_clear()


def get_section(path: str, default: Any = None) -> Any:
    """Look up ``"generator.regions"``-style dotted paths.

    A missing path returns ``default``; with no default it raises
    :class:`KeyError` naming the first missing part.
    """

    node: Any = get_config()
    walked = []
    for part in path.split("."):
        walked.append(part)
        if not isinstance(node, dict) or part not in node:
            if default is not None:
                return default
            raise KeyError(f"Configuration path '{'.'.join(walked)}' not found")
        node = node[part]
    return node


__all__ = ["CONFIG_ENV_VAR", "config_path", "get_config", "get_section", "reload"]
