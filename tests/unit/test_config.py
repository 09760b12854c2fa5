"""
Unit tests for loading ApplicationConfig from env.yaml
"""
import importlib

import pytest

import config
from src.app.use_cases.password_reset import PasswordResetSettings


@pytest.fixture
def load_config(monkeypatch):
    """Re-import config against the given file, restoring the original module afterwards"""

    def _load(path):
        monkeypatch.setenv("APP_CONFIG_FILE", str(path))
        return importlib.reload(config).ApplicationConfig

    yield _load
    monkeypatch.undo()
    importlib.reload(config)


def test_missing_config_file_runs_as_production(load_config, tmp_path):
    loaded = load_config(tmp_path / "absent.yaml")

    assert loaded.ENVIRONMENT == "production"
    assert loaded.is_production()
    assert PasswordResetSettings.from_config(loaded).expose_debug is False


def test_config_without_environment_key_runs_as_production(load_config, tmp_path):
    config_file = tmp_path / "env.yaml"
    config_file.write_text("FRONTEND_URL: https://garage.example.com\n")

    loaded = load_config(config_file)

    assert loaded.FRONTEND_URL == "https://garage.example.com"
    assert PasswordResetSettings.from_config(loaded).expose_debug is False


def test_named_development_environment_exposes_debug(load_config, tmp_path):
    config_file = tmp_path / "env.yaml"
    config_file.write_text("ENVIRONMENT: Development\nAPI_PREFIX: /api/\n")

    loaded = load_config(config_file)

    assert loaded.ENVIRONMENT == "development"
    assert loaded.API_PREFIX == "/api"
    assert PasswordResetSettings.from_config(loaded).expose_debug is True
