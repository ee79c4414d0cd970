"""Tests for settings resolution and config validation."""

import pytest

from config import find_config_file, load_config_file, load_settings, validate_config
from errors import ConfigError


def _write(path, text):
    path.write_text(text)
    return str(path)


def test_defaults():
    settings = load_settings()
    assert settings.root == "."
    assert settings.db_path == "var/lib/pacman"
    assert settings.cache_path == "var/cache/pacman/pkg"
    assert settings.log_level == "INFO"
    assert settings.config_file is None


def test_config_file_values(tmp_path):
    path = _write(tmp_path / "cfg.yml", "root: /srv\ndb_path: db\nlog_level: DEBUG\n")
    settings = load_settings(path)
    assert settings.root == "/srv"
    assert settings.db_path == "db"
    assert settings.log_level == "DEBUG"
    assert settings.config_file == path


def test_pacstate_section(tmp_path):
    path = _write(tmp_path / "cfg.yml", "pacstate:\n  cache_path: cache\nother: ignored\n")
    assert load_config_file(path) == {"cache_path": "cache"}


def test_empty_file(tmp_path):
    path = _write(tmp_path / "cfg.yml", "")
    assert load_config_file(path) == {}


def test_precedence(tmp_path, monkeypatch):
    path = _write(tmp_path / "cfg.yml", "root: /from-file\nlog_level: ERROR\n")
    monkeypatch.setenv("PACSTATE_ROOT", "/from-env")
    monkeypatch.setenv("PACSTATE_LOG_LEVEL", "warning")
    settings = load_settings(path)
    assert settings.root == "/from-env"
    assert settings.log_level == "WARNING"
    settings = load_settings(path, root="/from-cli", log_level="debug")
    assert settings.root == "/from-cli"
    assert settings.log_level == "DEBUG"


def test_env_config_location(tmp_path, monkeypatch):
    path = _write(tmp_path / "env.yml", "db_path: envdb\n")
    monkeypatch.setenv("PACSTATE_CONFIG", path)
    assert load_settings().db_path == "envdb"


def test_default_location(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "pacstate.yml", "cache_path: here\n")
    assert find_config_file() == "pacstate.yml"
    assert load_settings().cache_path == "here"


def test_explicit_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(str(tmp_path / "missing.yml"))


@pytest.mark.parametrize("text", [
    "unknown_key: 1\n",
    "log_level: LOUD\n",
    "root: ''\n",
    "db_path: 5\n",
    "- a\n- b\n",
    "root: [unclosed\n",
    "pacstate: 3\n",
])
def test_invalid_config(tmp_path, text):
    path = _write(tmp_path / "cfg.yml", text)
    with pytest.raises(ConfigError):
        load_config_file(path)


def test_invalid_env_level(monkeypatch):
    monkeypatch.setenv("PACSTATE_LOG_LEVEL", "chatty")
    with pytest.raises(ConfigError):
        load_settings()


def test_validate_config_message():
    with pytest.raises(ConfigError) as exc:
        validate_config({"log_level": "LOUD"})
    assert "log_level" in str(exc.value)
