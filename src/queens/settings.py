"""Generator settings with layered overrides.

Precedence, lowest to highest: built-in defaults, ``config.toml``,
``QUEENS_*`` environment variables, ``CLI_QUEENS_*`` environment variables,
explicit keyword arguments. Overrides that do not parse are ignored.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from project_config import get_section

from .minimizer import DEFAULT_MIN_CLUES
from .model import BOARD_SIZE

DEFAULT_MAX_ATTEMPTS = 1800


@dataclass(frozen=True)
class GeneratorSettings:
    """Finalised generation parameters after precedence resolution."""

    min_clues: int = DEFAULT_MIN_CLUES
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    seed: Optional[int] = None


_ENV_KEYS = {
    "min_clues": "QUEENS_MIN_CLUES",
    "max_attempts": "QUEENS_MAX_ATTEMPTS",
    "seed": "QUEENS_SEED",
}

_CLI_ENV_KEYS = {
    "min_clues": "CLI_QUEENS_MIN_CLUES",
    "max_attempts": "CLI_QUEENS_MAX_ATTEMPTS",
    "seed": "CLI_QUEENS_SEED",
}


def _parse_int(value: Any) -> Optional[int]:
    try:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip():
            return int(value.strip())
    except (TypeError, ValueError):
        return None
    return None


def _apply_overrides(settings: GeneratorSettings, overrides: Mapping[str, Any]) -> GeneratorSettings:
    min_clues = settings.min_clues
    max_attempts = settings.max_attempts
    seed = settings.seed

    if "min_clues" in overrides:
        maybe = _parse_int(overrides["min_clues"])
        if maybe is not None and 0 <= maybe <= BOARD_SIZE:
            min_clues = maybe
    if "max_attempts" in overrides:
        maybe = _parse_int(overrides["max_attempts"])
        if maybe is not None and maybe >= 1:
            max_attempts = maybe
    if "seed" in overrides:
        maybe = _parse_int(overrides["seed"])
        if maybe is not None:
            seed = maybe

    return replace(settings, min_clues=min_clues, max_attempts=max_attempts, seed=seed)


def _env_overrides(env: Mapping[str, str], keys: Mapping[str, str]) -> Dict[str, Any]:
    return {field: env[alias] for field, alias in keys.items() if alias in env}


def _config_overrides() -> Dict[str, Any]:
    section = get_section("generator", default={})
    if not isinstance(section, dict):
        return {}
    return {key: section[key] for key in ("min_clues", "max_attempts") if key in section}


def resolve_generator_settings(
    env: Mapping[str, str] | None = None,
    **cli: Any,
) -> GeneratorSettings:
    """Resolve settings from config, environment and keyword overrides.

    ``env`` defaults to :data:`os.environ`; keyword arguments whose value is
    ``None`` are treated as "not given".
    """

    env_map = dict(os.environ) if env is None else dict(env)
    settings = GeneratorSettings()
    settings = _apply_overrides(settings, _config_overrides())
    settings = _apply_overrides(settings, _env_overrides(env_map, _ENV_KEYS))
    settings = _apply_overrides(settings, _env_overrides(env_map, _CLI_ENV_KEYS))
    settings = _apply_overrides(settings, {k: v for k, v in cli.items() if v is not None})
    return settings


__all__ = ["DEFAULT_MAX_ATTEMPTS", "GeneratorSettings", "resolve_generator_settings"]
