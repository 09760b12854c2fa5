"""
Unit tests for PasswordResetSettings
"""
import pytest
from pydantic import ValidationError

from config import ApplicationConfig
from src.app.use_cases.password_reset import PasswordResetSettings


class _Config(ApplicationConfig):
    ENVIRONMENT = "development"
    PASSWORD_RESET_TTL_MINUTES = 15
    FRONTEND_URL = "https://garage.example.com"
    BCRYPT_ROUNDS = 10


def test_debug_exposed_outside_production():
    settings = PasswordResetSettings.from_config(_Config)

    assert settings.expose_debug is True
    assert settings.ttl_minutes == 15
    assert settings.frontend_url == "https://garage.example.com"
    assert settings.bcrypt_rounds == 10


@pytest.mark.parametrize("environment", ["production", "prod"])
def test_debug_never_exposed_in_production(environment):
    class Production(_Config):
        ENVIRONMENT = environment

    assert PasswordResetSettings.from_config(Production).expose_debug is False


def test_minimum_password_length_cannot_drop_below_eight():
    with pytest.raises(ValidationError):
        PasswordResetSettings(min_password_length=6)


def test_ttl_must_be_positive():
    with pytest.raises(ValidationError):
        PasswordResetSettings(ttl_minutes=0)
