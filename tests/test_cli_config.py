"""Tests for docsrs.cli_config module."""

from __future__ import annotations

import os
from unittest.mock import MagicMock

from docsrs.cli_config import CONFIG_ENV_FILE, load_config


def test_default_config_location():
    assert CONFIG_ENV_FILE.parts[-3:] == (".config", "docsrs-mcp", ".env")


def test_prefers_local_env(tmp_path):
    local = tmp_path / "project"
    local.mkdir()
    (local / ".env").write_text("DOCSRS_HTTP_TIMEOUT=5\n")
    global_env = tmp_path / "global.env"
    global_env.write_text("DOCSRS_HTTP_TIMEOUT=9\n")
    loader = MagicMock(return_value=True)

    loaded = load_config(cwd=local, config_env_file=global_env, load_env=loader)

    assert loaded == local / ".env"
    loader.assert_called_once_with(local / ".env")


def test_falls_back_to_user_config(tmp_path):
    global_env = tmp_path / "global.env"
    global_env.write_text("DOCSRS_HTTP_TIMEOUT=9\n")
    loader = MagicMock(return_value=True)

    loaded = load_config(cwd=tmp_path, config_env_file=global_env, load_env=loader)

    assert loaded == global_env
    loader.assert_called_once_with(global_env)


def test_no_config_files(tmp_path):
    loader = MagicMock()
    loaded = load_config(
        cwd=tmp_path, config_env_file=tmp_path / "missing.env", load_env=loader
    )
    assert loaded is None
    loader.assert_not_called()


def test_loads_into_environment(tmp_path, monkeypatch):
    monkeypatch.delenv("DOCSRS_USER_AGENT", raising=False)
    (tmp_path / ".env").write_text("DOCSRS_USER_AGENT=from-dotenv/1.0\n")

    load_config(cwd=tmp_path, config_env_file=tmp_path / "missing.env")

    assert os.environ["DOCSRS_USER_AGENT"] == "from-dotenv/1.0"
