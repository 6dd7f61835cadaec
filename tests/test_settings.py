"""Tests for environment and YAML configuration."""

import pytest

from sckan_export import settings as settings_module
from sckan_export.settings import SCKANSettings, get_settings, reload_settings


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch):
    for name in ("USERNAME", "PASSWORD", "ENDPOINT", "DATABASE", "REASONING", "QUERY_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(f"SCKAN_{name}", raising=False)
    settings_module._settings = None
    yield
    settings_module._settings = None


class TestDefaults:
    def test_public_endpoint_defaults(self):
        cfg = SCKANSettings(_env_file=None)
        assert cfg.username == "SPARC"
        assert cfg.password == ""
        assert cfg.endpoint == "https://stardog.scicrunch.io:5821"
        assert cfg.database == "NPO"
        assert cfg.reasoning is False
        assert cfg.log_level == "INFO"


class TestEnvironment:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SCKAN_DATABASE", "NPO_DEV")
        monkeypatch.setenv("SCKAN_PASSWORD", "secret")
        monkeypatch.setenv("SCKAN_REASONING", "true")
        cfg = SCKANSettings(_env_file=None)
        assert cfg.database == "NPO_DEV"
        assert cfg.password == "secret"
        assert cfg.reasoning is True

    def test_non_positive_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("SCKAN_QUERY_TIMEOUT", "0")
        with pytest.raises(ValueError):
            SCKANSettings(_env_file=None)


class TestYaml:
    def test_yaml_overrides(self, tmp_path):
        path = tmp_path / "sckan.yaml"
        path.write_text("database: STAGING\nquery_timeout: 30\n", encoding="utf-8")
        cfg = SCKANSettings.from_yaml(path)
        assert cfg.database == "STAGING"
        assert cfg.query_timeout == 30

    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = SCKANSettings.from_yaml(tmp_path / "missing.yaml")
        assert cfg.database == "NPO"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert SCKANSettings.from_yaml(path).endpoint == "https://stardog.scicrunch.io:5821"


class TestGlobalSettings:
    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_reload_from_yaml(self, tmp_path):
        path = tmp_path / "sckan.yaml"
        path.write_text("username: reader\n", encoding="utf-8")
        first = get_settings()
        reloaded = reload_settings(path)
        assert reloaded is not first
        assert get_settings().username == "reader"
