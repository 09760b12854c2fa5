"""
Unit tests for PurgeExpiredResetTokensUseCase
"""
import pytest

from src.app.use_cases.password_reset import PurgeExpiredResetTokensUseCase


@pytest.mark.asyncio
async def test_purge_reports_cleared_count(mock_uow):
    mock_uow.accounts.clear_expired_reset_tokens.return_value = 4
    use_case = PurgeExpiredResetTokensUseCase(mock_uow)

    result = await use_case.execute()

    assert result.is_ok()
    assert result.value.cleared == 4
    mock_uow.accounts.clear_expired_reset_tokens.assert_called_once()
    mock_uow.commit.assert_called_once()
