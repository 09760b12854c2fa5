"""
Integration tests for mounting the routers under API_PREFIX
"""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from tests.fixtures.accounts import attach_reset_token, create_test_account
from tests.fixtures.app import IntegrationConfig, build_test_app


class PrefixedConfig(IntegrationConfig):
    API_PREFIX = "/api"


class PrefixedRateLimitedConfig(PrefixedConfig):
    RATE_LIMIT_ENABLED = True
    PASSWORD_RESET_RATE_LIMIT_MAX_REQUESTS = 1


@pytest.mark.asyncio
async def test_routes_are_mounted_under_prefix(db_session: AsyncSession, email_sender):
    account = await create_test_account(db_session)
    plain_token, _ = await attach_reset_token(db_session, account)
    app = build_test_app(db_session, email_sender, config=PrefixedConfig)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        prefixed = await ac.post("/api/password-reset/validate-token", json={"token": plain_token})
        unprefixed = await ac.post("/password-reset/validate-token", json={"token": plain_token})
        purge = await ac.post(
            "/api/admin/password-reset/purge-expired", headers={"X-Admin-API-Key": "test-admin-key"}
        )
        health = await ac.get("/health")

    assert prefixed.status_code == 200
    assert prefixed.json()["email"] == "a@x.com"
    assert unprefixed.status_code == 404
    assert purge.status_code == 200
    assert health.status_code == 200


@pytest.mark.asyncio
async def test_rate_limit_follows_prefix(db_session: AsyncSession, email_sender):
    app = build_test_app(db_session, email_sender, config=PrefixedRateLimitedConfig)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        first = await ac.post("/api/password-reset/validate-token", json={"token": "guess"})
        second = await ac.post("/api/password-reset/validate-token", json={"token": "guess"})

    assert first.status_code == 400
    assert second.status_code == 429
