"""Tests for config/settings.py -- YAML settings loading."""

from __future__ import annotations

import pytest

from lsp_installer.config.settings import (
    DEFAULT_SETTINGS,
    SETTINGS_ENV_VAR,
    PipSettings,
    Settings,
    load_settings,
    parse_settings,
    settings_from_env,
)
from lsp_installer.errors import SettingsError


class TestParseSettings:
    def test_full(self):
        text = (
            "python3_host_prog: /my/python3\n"
            "pip:\n"
            "  install_args: ['--proxy', 'http://localhost:8080']\n"
        )
        assert parse_settings(text) == Settings(
            pip=PipSettings(install_args=("--proxy", "http://localhost:8080")),
            python3_host_prog="/my/python3",
        )

    def test_empty_text_is_default(self):
        assert parse_settings("") == DEFAULT_SETTINGS

    def test_missing_sections_default(self):
        settings = parse_settings("python3_host_prog: python3.12\n")
        assert settings.pip.install_args == ()

    def test_non_mapping_rejected(self):
        with pytest.raises(SettingsError, match="expected a YAML mapping"):
            parse_settings("- a\n- b\n")

    def test_install_args_must_be_list(self):
        with pytest.raises(SettingsError, match="install_args"):
            parse_settings("pip:\n  install_args: --proxy\n")

    def test_pip_must_be_mapping(self):
        with pytest.raises(SettingsError, match="'pip' must be a mapping"):
            parse_settings("pip: [1, 2]\n")

    def test_host_prog_must_be_string(self):
        with pytest.raises(SettingsError, match="python3_host_prog"):
            parse_settings("python3_host_prog: 3\n")

    def test_install_args_stringified(self):
        settings = parse_settings("pip:\n  install_args: ['--timeout', 60]\n")
        assert settings.pip.install_args == ("--timeout", "60")


class TestLoadSettings:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("pip:\n  install_args: ['--no-cache-dir']\n", encoding="utf-8")
        assert load_settings(path).pip.install_args == ("--no-cache-dir",)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SettingsError, match="not found"):
            load_settings(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("pip: [unclosed\n", encoding="utf-8")
        with pytest.raises(SettingsError, match="Failed to parse"):
            load_settings(path)

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
        assert settings_from_env() is DEFAULT_SETTINGS

    def test_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("python3_host_prog: /usr/bin/python3.12\n", encoding="utf-8")
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(path))
        assert settings_from_env().python3_host_prog == "/usr/bin/python3.12"
