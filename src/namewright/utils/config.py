"""Config utility for persistent Namewright settings.

Settings live in ``~/.config/namewright/config.toml`` (respecting
``XDG_CONFIG_HOME``) and can be overridden per key with ``NAMEWRIGHT_*``
environment variables or CLI options. Uses tomli/tomli-w for TOML parsing and
writing.

Example config.toml::

    [renamer]
    max_episode_length = 40

    [import]
    skip_disk_space_checks = false

    [plugins]
    defer_on_error = true

    [plugins.renamer_priorities]
    Legacy = 0
"""

import contextlib
import os
from pathlib import Path
from typing import Any, Dict, Optional, TypeVar, cast

import tomli
import tomli_w
from pydantic import BaseModel, Field

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "namewright"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "NAMEWRIGHT_"

_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


class RenamerSettings(BaseModel):
    """Settings consumed by the renamer strategies and the dispatcher."""

    max_episode_length: int = Field(default=33, ge=2)
    """Episode titles longer than this are truncated with an ellipsis."""

    skip_disk_space_checks: bool = False
    """Do not check free space before picking a destination folder."""

    defer_on_error: bool = True
    """Try the next renamer when one raises, instead of propagating."""

    renamer_priorities: Dict[str, int] = Field(default_factory=dict)
    enabled_renamers: Dict[str, bool] = Field(default_factory=dict)


def _read_config_file() -> dict[str, Any]:
    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve ``data["a"]["b"]`` for ``dotted_key="a.b"`` (None if missing)."""
    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str) -> str:
    """``"renamer.max_episode_length"`` -> ``"NAMEWRIGHT_RENAMER_MAX_EPISODE_LENGTH"``."""
    return ENV_PREFIX + dotted_key.replace(".", "_").upper()


def _coerce(raw: Any, default: T) -> T:
    """Coerce *raw* to the type of *default*, returning *default* on failure."""
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return cast(T, raw)
        if isinstance(raw, str):
            return cast(T, raw.strip().lower() in _TRUTHY)
        return default
    if isinstance(default, int):
        if isinstance(raw, int) and not isinstance(raw, bool):
            return cast(T, raw)
        if isinstance(raw, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(raw))
        return default
    if isinstance(default, dict):
        return cast(T, raw) if isinstance(raw, dict) else default
    return cast(T, raw)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"renamer.max_episode_length"``.
        default: Value to fall back to; its type drives coercion.
        cli_value: Value passed from a CLI option (None when not provided).

    Returns:
        The resolved value.
    """
    if cli_value is not None:
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    return default


def load_settings(
    *,
    max_episode_length: Optional[int] = None,
    skip_disk_space_checks: Optional[bool] = None,
    defer_on_error: Optional[bool] = None,
) -> RenamerSettings:
    """Build :class:`RenamerSettings` from CLI overrides, env and config file."""
    defaults = RenamerSettings()
    return RenamerSettings(
        max_episode_length=resolve_setting(
            "renamer.max_episode_length",
            default=defaults.max_episode_length,
            cli_value=max_episode_length,
        ),
        skip_disk_space_checks=resolve_setting(
            "import.skip_disk_space_checks",
            default=defaults.skip_disk_space_checks,
            cli_value=skip_disk_space_checks,
        ),
        defer_on_error=resolve_setting(
            "plugins.defer_on_error",
            default=defaults.defer_on_error,
            cli_value=defer_on_error,
        ),
        renamer_priorities=resolve_setting(
            "plugins.renamer_priorities", default=defaults.renamer_priorities
        ),
        enabled_renamers=resolve_setting(
            "plugins.enabled_renamers", default=defaults.enabled_renamers
        ),
    )


def get_setting(key: str) -> Any | None:
    """Read a raw value from the config file only."""
    return _lookup_nested(_read_config_file(), key)


def set_setting(key: str, value: Any) -> None:
    """Persist *value* under the dotted *key* in config.toml."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    table = data
    for part in parents:
        table = table.setdefault(part, {})
    table[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)
