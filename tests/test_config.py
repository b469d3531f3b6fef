"""Tests for config-dir resolution and config.toml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from todo.config import init_config, load_config, resolve_config_dir


def test_xdg_config_home_wins(tmp_path: Path) -> None:
    env = {"XDG_CONFIG_HOME": str(tmp_path / "xdg"), "HOME": str(tmp_path / "home")}
    assert resolve_config_dir(env) == tmp_path / "xdg" / "todo"


@pytest.mark.parametrize("env_extra", [{}, {"XDG_CONFIG_HOME": ""}])
def test_falls_back_to_home_dot_todo(tmp_path: Path, env_extra: dict[str, str]) -> None:
    env = {"HOME": str(tmp_path), **env_extra}
    assert resolve_config_dir(env) == tmp_path / ".todo"


def test_defaults_without_config_file(tmp_path: Path) -> None:
    cfg = load_config({"XDG_CONFIG_HOME": str(tmp_path)})
    assert cfg.config_dir == tmp_path / "todo"
    assert cfg.db_path == tmp_path / "todo" / "database"
    assert cfg.log_level == "WARNING"
    assert not cfg.config_dir.exists()


def test_ensure_dirs_creates_config_dir(tmp_path: Path) -> None:
    cfg = load_config({"XDG_CONFIG_HOME": str(tmp_path)})
    cfg.ensure_dirs()
    assert cfg.config_dir.is_dir()


def test_config_file_overrides(tmp_path: Path) -> None:
    config_dir = tmp_path / "todo"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text(
        '[todo]\ndatabase = "tasks.txt"\n\n[logging]\nlevel = "debug"\n'
    )
    cfg = load_config({"XDG_CONFIG_HOME": str(tmp_path)})
    assert cfg.db_path == config_dir / "tasks.txt"
    assert cfg.log_level == "DEBUG"


def test_absolute_database_path(tmp_path: Path) -> None:
    config_dir = tmp_path / "todo"
    config_dir.mkdir()
    target = tmp_path / "elsewhere" / "db"
    (config_dir / "config.toml").write_text(f'[todo]\ndatabase = "{target}"\n')
    assert load_config({"XDG_CONFIG_HOME": str(tmp_path)}).db_path == target


def test_init_config_writes_loadable_file(tmp_path: Path) -> None:
    path = init_config(tmp_path / "todo")
    assert path.exists()
    cfg = load_config({"XDG_CONFIG_HOME": str(tmp_path)})
    assert cfg.db_path == tmp_path / "todo" / "database"
    with pytest.raises(FileExistsError):
        init_config(tmp_path / "todo")
