import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.password_reset import PasswordResetSettings
from tests.fixtures.email_sender import RecordingEmailSender


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_valid_reset_digest = AsyncMock(return_value=None)
    uow.accounts.update_reset_token = AsyncMock()
    uow.accounts.consume_reset_and_set_password = AsyncMock(return_value=True)
    uow.accounts.clear_expired_reset_tokens = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def settings():
    return PasswordResetSettings(
        ttl_minutes=30,
        frontend_url="https://app.example.com",
        bcrypt_rounds=4,
        expose_debug=True,
    )
