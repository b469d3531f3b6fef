"""TodoConfig: per-user config for the todo database.

Default layout:

    $XDG_CONFIG_HOME/todo/      # or ~/.todo/ when XDG_CONFIG_HOME is unset/empty
        config.toml             # optional
        database                # the record file

config.toml example:

    [todo]
    database = "database"   # relative to the config dir, or absolute

    [logging]
    level = "WARNING"

Resolved once at startup and passed explicitly to RecordStore.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

_CONFIG_FILENAME = "config.toml"
_APP_DIRNAME = "todo"
_LEGACY_DIRNAME = ".todo"
_DEFAULT_DATABASE = "database"
_DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class TodoConfig:
    """Resolved configuration for the todo database."""

    config_dir: Path
    db_path: Path = field(default_factory=Path)
    log_level: str = _DEFAULT_LOG_LEVEL

    @property
    def config_path(self) -> Path:
        return self.config_dir / _CONFIG_FILENAME

    def ensure_dirs(self) -> None:
        """Create config_dir and the database's parent if they don't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)


def resolve_config_dir(env: Mapping[str, str] | None = None) -> Path:
    """Pick $XDG_CONFIG_HOME/todo, falling back to $HOME/.todo."""
    env = os.environ if env is None else env
    xdg = env.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / _APP_DIRNAME
    home = env.get("HOME", "")
    return (Path(home) if home else Path.home()) / _LEGACY_DIRNAME


def load_config(env: Mapping[str, str] | None = None) -> TodoConfig:
    """Resolve the config dir and read config.toml from it if present."""
    config_dir = resolve_config_dir(env)
    config_path = config_dir / _CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("rb") as f:
            raw = tomllib.load(f)

    todo_section = raw.get("todo", {})
    log_section = raw.get("logging", {})

    # An absolute database path wins over config_dir
    db_path = config_dir / str(todo_section.get("database", _DEFAULT_DATABASE))

    return TodoConfig(
        config_dir=config_dir,
        db_path=db_path,
        log_level=str(log_section.get("level", _DEFAULT_LOG_LEVEL)).upper(),
    )


def init_config(config_dir: Path) -> Path:
    """Write a default config.toml in config_dir. Raises if already exists."""
    config_path = config_dir / _CONFIG_FILENAME
    if config_path.exists():
        msg = f"config.toml already exists at {config_path}"
        raise FileExistsError(msg)

    config_dir.mkdir(parents=True, exist_ok=True)
    content = f"""\
[todo]
# database = "{_DEFAULT_DATABASE}"   # relative to this directory, or absolute

# [logging]
# level = "{_DEFAULT_LOG_LEVEL}"   # DEBUG | INFO | WARNING | ERROR
"""
    config_path.write_text(content)
    return config_path
