"""
Storage failures surface as a generic 500
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from src.depends import get_unit_of_work
from tests.fixtures.app import build_test_app


@pytest.mark.asyncio
async def test_storage_failure_returns_generic_500(db_session, email_sender):
    app = build_test_app(db_session, email_sender)

    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.accounts = MagicMock()
    uow.accounts.get_by_valid_reset_digest = AsyncMock(
        side_effect=OperationalError("SELECT", {}, Exception("database is locked"))
    )

    async def failing_unit_of_work():
        yield uow

    app.dependency_overrides[get_unit_of_work] = failing_unit_of_work

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.post("/password-reset/validate-token", json={"token": "a" * 64})

    assert response.status_code == 500
    assert response.json() == {
        "error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}
    }
    assert "database is locked" not in response.text
