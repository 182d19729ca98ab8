"""Tab settings loaded from a TOML file.

Each top-level table describes one tab. Values are type-checked here; whether
a tab has everything its kind needs is checked when the tab is built.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .colors import COLOR_CODES, DEFAULT_BASE_COLOR, DEFAULT_HIGHLIGHT_COLOR
from .errors import ConfigurationError
from .launcher import CommandTemplate

logger = logging.getLogger(__name__)

APP_NAME = "simon"
CONFIG_FILENAME = "simon.config.toml"
CONFIG_ENV_VAR = "SIMON_CONFIG"


def default_config_path() -> Path:
    """Return ``$SIMON_CONFIG`` or the per-user config location."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class TabSettings:
    """Raw settings for one tab, as written in the config file."""

    key: str
    name: str
    kind: str
    priority: int
    media_dirs: tuple[str, ...] | None = None
    media_types: tuple[str, ...] | None = None
    subs_dirs: tuple[str, ...] | None = None
    subs_types: tuple[str, ...] | None = None
    command: CommandTemplate | None = None
    base_color: str = DEFAULT_BASE_COLOR
    highlight_color: str = DEFAULT_HIGHLIGHT_COLOR

    def sort_key(self) -> tuple[int, str]:
        return (self.priority, self.name)


def _require_str(table: dict[str, object], field: str, key: str) -> str:
    value = table.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"[{key}] {field} must be a non-empty string")
    return value


def _optional_str_list(table: dict[str, object], field: str, key: str) -> tuple[str, ...] | None:
    value = table.get(field)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigurationError(f"[{key}] {field} must be a list of strings")
    return tuple(value)


def _color(table: dict[str, object], field: str, key: str, default: str) -> str:
    value = table.get(field, default)
    if not isinstance(value, str) or value not in COLOR_CODES:
        raise ConfigurationError(
            f"[{key}] {field} must be one of: {', '.join(sorted(COLOR_CODES))}"
        )
    return value


def _command(table: dict[str, object], key: str) -> CommandTemplate | None:
    value = table.get("command")
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ConfigurationError(f"[{key}] command must be a table with program and args")
    program = _require_str(value, "program", f"{key}.command")
    args = _optional_str_list(value, "args", f"{key}.command")
    return CommandTemplate(program=program, args=args or ())


def parse_tab(key: str, table: object) -> TabSettings:
    """Validate one top-level TOML table into ``TabSettings``."""
    if not isinstance(table, dict):
        raise ConfigurationError(f"{key!r} must be a table describing a tab")
    priority = table.get("priority", 0)
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise ConfigurationError(f"[{key}] priority must be an integer")
    name = table.get("name", key)
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError(f"[{key}] name must be a non-empty string")
    return TabSettings(
        key=key,
        name=name,
        kind=_require_str(table, "kind", key),
        priority=priority,
        media_dirs=_optional_str_list(table, "media_dirs", key),
        media_types=_optional_str_list(table, "media_types", key),
        subs_dirs=_optional_str_list(table, "subs_dirs", key),
        subs_types=_optional_str_list(table, "subs_types", key),
        command=_command(table, key),
        base_color=_color(table, "base_color", key, DEFAULT_BASE_COLOR),
        highlight_color=_color(table, "highlight_color", key, DEFAULT_HIGHLIGHT_COLOR),
    )


def parse_settings(data: dict[str, object]) -> list[TabSettings]:
    """Return tabs ordered by priority, ties broken by name."""
    tabs = [parse_tab(key, table) for key, table in data.items()]
    tabs.sort(key=TabSettings.sort_key)
    return tabs


def settings_from_file(path: Path) -> list[TabSettings]:
    """Load and validate the settings file at ``path``."""
    try:
        with open(path, "rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"config file not found: {path}") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"cannot read config file {path}: {exc}") from exc
    tabs = parse_settings(data)
    logger.info("loaded %d tab(s) from %s", len(tabs), path)
    return tabs


__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "TabSettings",
    "default_config_path",
    "parse_settings",
    "parse_tab",
    "settings_from_file",
]
