"""Tests for settings loaded from the environment."""

import pytest
from pydantic import ValidationError

from pievote.config import DEFAULT_TIMEOUT, ConfigError, Settings, StoreSettings

ENV_VARS = ["PIEVOTE_ENDPOINT", "PIEVOTE_TIMEOUT", "PIEVOTE_LOG_LEVEL", "PIEVOTE_SHEET_PATH"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.endpoint == ""
        assert settings.timeout == DEFAULT_TIMEOUT
        assert settings.log_level == "WARNING"
        assert settings.sheet_path is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PIEVOTE_ENDPOINT", " https://script.example.com/exec ")
        monkeypatch.setenv("PIEVOTE_TIMEOUT", "7.5")
        monkeypatch.setenv("PIEVOTE_LOG_LEVEL", "debug")
        monkeypatch.setenv("PIEVOTE_SHEET_PATH", "/tmp/sheet.json")

        settings = Settings.from_env()
        assert settings.endpoint == "https://script.example.com/exec"
        assert settings.timeout == 7.5
        assert settings.log_level == "DEBUG"
        assert settings.sheet_path == "/tmp/sheet.json"

    def test_blank_values_use_defaults(self, monkeypatch):
        monkeypatch.setenv("PIEVOTE_TIMEOUT", "")
        assert Settings.from_env().timeout == DEFAULT_TIMEOUT

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_bad_timeout(self, monkeypatch, value):
        monkeypatch.setenv("PIEVOTE_TIMEOUT", value)
        with pytest.raises(ValidationError, match="timeout"):
            Settings.from_env()

    def test_bad_log_level(self, monkeypatch):
        monkeypatch.setenv("PIEVOTE_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError, match="log_level"):
            Settings.from_env()

    @pytest.mark.parametrize("value", [0, -5.0])
    def test_assignment_is_validated(self, value):
        settings = Settings.from_env()
        with pytest.raises(ValidationError, match="timeout"):
            settings.timeout = value

    def test_require_endpoint(self):
        assert Settings(endpoint="https://x/exec").require_endpoint() == "https://x/exec"
        with pytest.raises(ConfigError, match="PIEVOTE_ENDPOINT"):
            Settings().require_endpoint()


class TestStoreSettings:
    def test_ignores_client_settings(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PIEVOTE_LOG_LEVEL", "chatty")
        monkeypatch.setenv("PIEVOTE_TIMEOUT", "soon")
        monkeypatch.setenv("PIEVOTE_SHEET_PATH", str(tmp_path / "sheet.json"))
        assert StoreSettings().sheet_path == str(tmp_path / "sheet.json")
