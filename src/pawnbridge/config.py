"""Application settings: defaults, optional TOML file, environment overrides.

Example ``pawnbridge.toml``::

    [engine]
    path = "/usr/games/stockfish"
    depth = 12

    [game]
    human_side = "black"

    [ui]
    use_figurine_notation = true
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from pawnbridge.core.enums import Side

CONFIG_ENV = "PAWNBRIDGE_CONFIG"
DEFAULT_CONFIG_FILE = "pawnbridge.toml"


class ConfigError(ValueError):
    """Invalid configuration file or environment value."""


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Engine
    engine_path: str = "stockfish"
    engine_args: list[str] = field(default_factory=list)
    search_depth: int = 10

    # Engine timing
    engine_request_delay_ms: int = 250
    ready_retry_ms: int = 100
    ready_max_attempts: int = 100
    engine_reply_timeout_ms: int = 30_000  # 0 = wait forever

    # Game
    human_side: Side = Side.WHITE

    # UI
    use_figurine_notation: bool = False
    random_theme: bool = True

    # Logging
    log_level: str = "INFO"


# TOML table/key → AppSettings attribute
_TOML_KEYS: dict[str, dict[str, str]] = {
    "engine": {
        "path": "engine_path",
        "args": "engine_args",
        "depth": "search_depth",
        "request_delay_ms": "engine_request_delay_ms",
        "ready_retry_ms": "ready_retry_ms",
        "ready_max_attempts": "ready_max_attempts",
        "reply_timeout_ms": "engine_reply_timeout_ms",
    },
    "game": {"human_side": "human_side"},
    "ui": {
        "use_figurine_notation": "use_figurine_notation",
        "random_theme": "random_theme",
        "log_level": "log_level",
    },
}

_ENV_KEYS: dict[str, str] = {
    "PAWNBRIDGE_ENGINE": "engine_path",
    "PAWNBRIDGE_DEPTH": "search_depth",
    "PAWNBRIDGE_LOG_LEVEL": "log_level",
}

_FIELD_TYPES: dict[str, str] = {f.name: str(f.type) for f in fields(AppSettings)}


def _coerce(name: str, value: Any) -> Any:
    """Convert *value* to the type of the ``AppSettings`` field *name*."""
    kind = _FIELD_TYPES[name]
    try:
        if kind == "Side":
            return value if isinstance(value, Side) else Side.parse(str(value))
        if kind == "int":
            if isinstance(value, bool):
                raise TypeError("boolean is not an integer")
            number = int(value)
            if number < 0:
                raise ValueError("must not be negative")
            return number
        if kind == "bool":
            if isinstance(value, str):
                lowered = value.strip().lower()
                if lowered not in ("1", "0", "true", "false", "yes", "no"):
                    raise ValueError(f"not a boolean: {value!r}")
                return lowered in ("1", "true", "yes")
            if not isinstance(value, bool):
                raise TypeError(f"not a boolean: {value!r}")
            return value
        if kind == "list[str]":
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise TypeError("expected a list of strings")
            return list(value)
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {type(value).__name__}")
        return value
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for {name}: {exc}") from exc


def apply_mapping(settings: AppSettings, raw: Mapping[str, Any]) -> AppSettings:
    """Copy known ``[table] key`` entries from parsed TOML into *settings*."""
    for table, keys in _TOML_KEYS.items():
        section = raw.get(table)
        if section is None:
            continue
        if not isinstance(section, Mapping):
            raise ConfigError(f"[{table}] must be a table")
        for key, attr in keys.items():
            if key in section:
                setattr(settings, attr, _coerce(attr, section[key]))
    return settings


def apply_environment(settings: AppSettings, environ: Mapping[str, str]) -> AppSettings:
    for env_name, attr in _ENV_KEYS.items():
        value = environ.get(env_name)
        if value:
            setattr(settings, attr, _coerce(attr, value))
    return settings


def load_settings(
    path: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppSettings:
    """Build settings from defaults, then the TOML file, then the environment.

    The file is taken from *path*, else ``$PAWNBRIDGE_CONFIG``, else
    ``./pawnbridge.toml``. A missing default file is fine; a missing file
    that was asked for explicitly is a :class:`ConfigError`.
    """
    env = os.environ if environ is None else environ
    settings = AppSettings()

    explicit = path if path is not None else env.get(CONFIG_ENV)
    config_path = Path(explicit) if explicit else Path(DEFAULT_CONFIG_FILE)
    if config_path.is_file():
        try:
            with config_path.open("rb") as fh:
                raw = tomllib.load(fh)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Cannot read {config_path}: {exc}") from exc
        apply_mapping(settings, raw)
    elif explicit:
        raise ConfigError(f"Config file not found: {config_path}")

    return apply_environment(settings, env)
