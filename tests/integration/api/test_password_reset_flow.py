"""
End-to-end password reset scenarios: request -> validate -> reset
"""
import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from tests.fixtures.accounts import create_test_account


@pytest.mark.asyncio
async def test_complete_password_reset_flow(client: AsyncClient, db_session: AsyncSession, email_sender):
    account = await create_test_account(db_session)

    request_response = await client.post("/password-reset/request", json={"email": "a@x.com"})
    assert request_response.status_code == 200
    token = request_response.json()["debug"]["token"]

    validate_response = await client.post("/password-reset/validate-token", json={"token": token})
    assert validate_response.status_code == 200
    assert validate_response.json()["email"] == "a@x.com"

    reset_response = await client.post(
        "/password-reset/reset", json={"token": token, "newPassword": "NewPass1!"}
    )
    assert reset_response.status_code == 200

    reuse_response = await client.post(
        "/password-reset/reset", json={"token": token, "newPassword": "AnotherPass1!"}
    )
    assert reuse_response.status_code == 400
    assert reuse_response.json()["error"]["code"] == "INVALID_TOKEN"
    assert "Invalid or expired" in reuse_response.json()["error"]["message"]

    await db_session.refresh(account)
    assert account.password_reset_token is None
    assert account.password_reset_expires is None
    assert len(email_sender.sent) == 1


@pytest.mark.asyncio
async def test_bogus_token_changes_nothing(client: AsyncClient, db_session: AsyncSession):
    account = await create_test_account(db_session)
    old_hash = account.password_hash

    response = await client.post(
        "/password-reset/reset", json={"token": "bogus", "newPassword": "whatever1"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"
    await db_session.refresh(account)
    assert account.password_hash == old_hash


@pytest.mark.asyncio
async def test_ghost_email_sends_nothing(client: AsyncClient, email_sender):
    response = await client.post("/password-reset/request", json={"email": "ghost@nowhere.com"})

    assert response.status_code == 200
    assert "message" in response.json()
    assert "debug" not in response.json()
    assert email_sender.sent == []
