"""Layered settings for vcs.

Reads and writes ``~/.vcs/config.toml``::

    [settings]
    git-timeout = "120"

    [[provider_overrides]]
    url_base = "https://git.example.com"
    provider = "gitlab"

Resolution order: environment variables > settings file > defaults.
"""

from __future__ import annotations

import os
from enum import unique
from pathlib import Path
from typing import Any, NamedTuple, cast

import tomlkit
from pydantic import ValidationError

from vcs._compat import StrEnum
from vcs._utils.toml_utils import TomlError, load_toml_from_path_if_exists, load_toml_with_tomlkit, save_toml_to_path
from vcs.exceptions import SettingsError
from vcs.providers import ProviderOverride

# ── Types ───────────────────────────────────────────────────────────


@unique
class SettingSource(StrEnum):
    ENV = "env"
    FILE = "file"
    DEFAULT = "default"


class SettingEntry(NamedTuple):
    key: str
    cli_key: str
    value: str
    source: SettingSource


# ── Paths ───────────────────────────────────────────────────────────

CONFIG_DIR = Path.home() / ".vcs"
SETTINGS_PATH = CONFIG_DIR / "config.toml"

_SETTINGS_TABLE = "settings"
_OVERRIDES_TABLE = "provider_overrides"

# ── Setting keys ────────────────────────────────────────────────────

# Map from internal key to environment variable name
_ENV_KEYS: dict[str, str] = {
    "git_binary": "VCS_GIT_BINARY",
    "git_timeout": "VCS_GIT_TIMEOUT",
    "log_level": "VCS_LOG_LEVEL",
}

_DEFAULTS: dict[str, str] = {
    "git_binary": "git",
    "git_timeout": "60",
    "log_level": "WARNING",
}

# Map from CLI names (kebab-case, also used as file keys) to internal keys
_KEY_ALIASES: dict[str, str] = {
    "git-binary": "git_binary",
    "git-timeout": "git_timeout",
    "log-level": "log_level",
}

VALID_KEYS: list[str] = list(_KEY_ALIASES.keys())

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def resolve_key(cli_key: str) -> str | None:
    """Resolve a CLI key name to an internal setting key."""
    return _KEY_ALIASES.get(cli_key)


def _cli_key_for(internal_key: str) -> str:
    return next(cli_k for cli_k, int_k in _KEY_ALIASES.items() if int_k == internal_key)


def validate_setting_value(key: str, value: str) -> str:
    """Check a raw value for an internal key and return it normalized.

    Raises:
        SettingsError: If the value is not acceptable for the key.
    """
    match key:
        case "git_timeout":
            try:
                timeout = float(value)
            except ValueError as exc:
                msg = f"Invalid git-timeout '{value}': must be a number of seconds"
                raise SettingsError(msg) from exc
            if timeout <= 0:
                msg = f"Invalid git-timeout '{value}': must be positive"
                raise SettingsError(msg)
            return value
        case "log_level":
            level = value.upper()
            if level not in _LOG_LEVELS:
                msg = f"Invalid log-level '{value}': expected one of {', '.join(sorted(_LOG_LEVELS))}"
                raise SettingsError(msg)
            return level
        case "git_binary":
            if not value.strip():
                msg = "git-binary cannot be empty"
                raise SettingsError(msg)
            return value
        case _:
            msg = f"Unknown setting '{key}'"
            raise SettingsError(msg)


# ── File I/O ────────────────────────────────────────────────────────


def _read_settings_file() -> dict[str, Any]:
    try:
        data = load_toml_from_path_if_exists(SETTINGS_PATH)
    except TomlError as exc:
        raise SettingsError(str(exc)) from exc
    return data or {}


def _read_settings_table() -> dict[str, str]:
    table = _read_settings_file().get(_SETTINGS_TABLE, {})
    if not isinstance(table, dict):
        msg = f"'{_SETTINGS_TABLE}' in '{SETTINGS_PATH}' must be a table"
        raise SettingsError(msg)
    entries = cast("dict[str, Any]", table)
    return {str(key): str(value) for key, value in entries.items()}


# ── Public API ──────────────────────────────────────────────────────


def load_settings() -> dict[str, str]:
    """Load all settings with resolution: env > file > defaults.

    Returns:
        A dict with keys: git_binary, git_timeout, log_level.
    """
    file_entries = _read_settings_table()
    merged = dict(_DEFAULTS)

    for cli_key, internal_key in _KEY_ALIASES.items():
        if cli_key in file_entries:
            merged[internal_key] = file_entries[cli_key]

    for internal_key, env_name in _ENV_KEYS.items():
        env_val = os.environ.get(env_name)
        if env_val is not None:
            merged[internal_key] = env_val

    return merged


def get_setting_value(key: str) -> SettingEntry:
    """Get a single setting value with its source.

    Args:
        key: Internal key (e.g. "git_timeout").

    Returns:
        A SettingEntry with the value and its source.
    """
    cli_key = _cli_key_for(key)

    env_val = os.environ.get(_ENV_KEYS[key])
    if env_val is not None:
        return SettingEntry(key=key, cli_key=cli_key, value=env_val, source=SettingSource.ENV)

    file_entries = _read_settings_table()
    if cli_key in file_entries:
        return SettingEntry(key=key, cli_key=cli_key, value=file_entries[cli_key], source=SettingSource.FILE)

    return SettingEntry(key=key, cli_key=cli_key, value=_DEFAULTS[key], source=SettingSource.DEFAULT)


def set_setting_value(key: str, value: str) -> None:
    """Validate and store a setting in the settings file, keeping existing formatting.

    Args:
        key: Internal key (e.g. "git_timeout").
        value: The value to set.

    Raises:
        SettingsError: If the value is invalid or the file cannot be parsed.
    """
    normalized = validate_setting_value(key, value)
    try:
        document = load_toml_with_tomlkit(SETTINGS_PATH)
    except TomlError as exc:
        raise SettingsError(str(exc)) from exc

    if _SETTINGS_TABLE not in document:
        document.add(_SETTINGS_TABLE, tomlkit.table())
    table = cast("dict[str, Any]", document[_SETTINGS_TABLE])
    table[_cli_key_for(key)] = normalized
    save_toml_to_path(document, SETTINGS_PATH)


def list_settings() -> list[SettingEntry]:
    """List all setting values with their sources."""
    return [get_setting_value(internal_key) for internal_key in _KEY_ALIASES.values()]


def get_git_timeout() -> float:
    """Return the effective ``git ls-remote`` timeout in seconds."""
    raw = load_settings()["git_timeout"]
    return float(validate_setting_value("git_timeout", raw))


def get_git_binary() -> str:
    return load_settings()["git_binary"]


def get_log_level() -> str:
    return validate_setting_value("log_level", load_settings()["log_level"])


def load_provider_overrides() -> list[ProviderOverride]:
    """Load ``[[provider_overrides]]`` entries from the settings file.

    Raises:
        SettingsError: If an entry is malformed or names an unknown provider.
    """
    raw_overrides = _read_settings_file().get(_OVERRIDES_TABLE, [])
    if not isinstance(raw_overrides, list):
        msg = f"'{_OVERRIDES_TABLE}' in '{SETTINGS_PATH}' must be an array of tables"
        raise SettingsError(msg)

    overrides: list[ProviderOverride] = []
    for raw_override in cast("list[Any]", raw_overrides):
        try:
            overrides.append(ProviderOverride.model_validate(raw_override))
        except ValidationError as exc:
            msg = f"Invalid provider override in '{SETTINGS_PATH}': {exc}"
            raise SettingsError(msg) from exc
    return overrides
