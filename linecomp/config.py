# linecomp/config.py
"""
Runtime settings for linecomp front ends.

Settings are resolved in increasing precedence from:
1) built-in defaults (:class:`Settings`);
2) a YAML file: the explicit ``path``, else ``$LINECOMP_CONFIG``, else
   ``~/.config/linecomp/config.yaml`` when it exists;
3) environment variables (a ``.env`` file is loaded first, never
   overriding variables that are already set).

Environment variables
---------------------
LINECOMP_CONFIG, LINECOMP_LOG_LEVEL, LINECOMP_LOG_FILE,
LINECOMP_SHOW_HIDDEN, LINECOMP_MAX_CANDIDATES

The engine itself never reads these settings; they configure the CLI and
the interactive shell only.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv

__all__ = [
    "Settings",
    "ConfigNotFoundError",
    "ConfigParseError",
    "DEFAULT_CONFIG_PATH",
    "load_settings",
]

DEFAULT_CONFIG_PATH = Path("~/.config/linecomp/config.yaml")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigNotFoundError(FileNotFoundError):
    """Raised when an explicitly requested config file does not exist."""


class ConfigParseError(RuntimeError):
    """Raised when the config file is not valid YAML or has wrong types."""


@dataclass(frozen=True)
class Settings:
    """Resolved settings.

    Attributes
    ----------
    log_level : str
        Level name for the ``linecomp`` logger.
    log_file : Optional[str]
        Extra UTF-8 log file, if any.
    command_separator : str
        Separator between the command and its arguments in the shell source.
    stdin_separator : Optional[str]
        Splits input lines into display/real for the ``stdin`` source.
    show_hidden : bool
        When False, dot-entries are left out of file listings.
    max_candidates : int
        How many candidates the CLI prints at most.
    """

    log_level: str = "WARNING"
    log_file: Optional[str] = None
    command_separator: str = " "
    stdin_separator: Optional[str] = None
    show_hidden: bool = True
    max_candidates: int = 50


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigParseError(f"{key}: expected a boolean, got {value!r}")


def _as_int(key: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigParseError(f"{key}: expected an integer, got {value!r}") from exc
    if number <= 0:
        raise ConfigParseError(f"{key}: must be positive, got {number}")
    return number


def _as_separator(key: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    if len(text) != 1:
        raise ConfigParseError(f"{key}: expected a single character, got {value!r}")
    return text


_COERCE = {
    "log_level": lambda k, v: str(v).upper(),
    "log_file": lambda k, v: None if v in (None, "") else str(v),
    "command_separator": _as_separator,
    "stdin_separator": _as_separator,
    "show_hidden": _as_bool,
    "max_candidates": _as_int,
}

_ENV_KEYS = {
    "LINECOMP_LOG_LEVEL": "log_level",
    "LINECOMP_LOG_FILE": "log_file",
    "LINECOMP_SHOW_HIDDEN": "show_hidden",
    "LINECOMP_MAX_CANDIDATES": "max_candidates",
}


def _coerce(values: Mapping[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigParseError(f"Unknown setting(s): {', '.join(unknown)}")
    return {key: _COERCE[key](key, value) for key, value in values.items()}


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"{path}: top level must be a mapping")
    return data


def _resolve_path(path: Optional[Union[str, Path]]) -> Optional[Path]:
    """Return the config file to read, or None when there is none."""
    if path is not None:
        explicit = Path(path).expanduser()
        if not explicit.is_file():
            raise ConfigNotFoundError(f"Config file not found: {explicit}")
        return explicit
    env_path = os.getenv("LINECOMP_CONFIG")
    if env_path:
        from_env = Path(env_path).expanduser()
        if not from_env.is_file():
            raise ConfigNotFoundError(f"Config file not found: {from_env} (from LINECOMP_CONFIG)")
        return from_env
    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.is_file() else None


def load_settings(path: Optional[Union[str, Path]] = None, use_dotenv: bool = True) -> Settings:
    """Resolve :class:`Settings` from defaults, YAML and the environment.

    Raises
    ------
    ConfigNotFoundError
        ``path`` (or ``$LINECOMP_CONFIG``) names a missing file.
    ConfigParseError
        The file or an environment value cannot be interpreted.
    """
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    settings = Settings()
    config_path = _resolve_path(path)
    if config_path is not None:
        settings = replace(settings, **_coerce(_read_yaml(config_path)))

    env_values = {key: os.environ[var] for var, key in _ENV_KEYS.items() if os.environ.get(var)}
    if env_values:
        settings = replace(settings, **_coerce(env_values))
    return settings
