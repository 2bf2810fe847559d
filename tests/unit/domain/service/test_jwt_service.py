"""Unit tests for JWTService."""

from datetime import timedelta

import pytest

from blog.domain.service import JWTService
from blog.util.clock import FixedClock
from blog.util.jwt import JWTError
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


@pytest.mark.asyncio
async def test_token_round_trips_claims(unit_env):
    service = await unit_env.get(JWTService)

    payload = service.verify_token(service.create_token("user-1", "Alice"))

    assert payload.user_id == "user-1"
    assert payload.name == "Alice"


@pytest.mark.asyncio
async def test_token_expires_on_application_clock(unit_env):
    service = await unit_env.get(JWTService)
    clock = await unit_env.get(FixedClock)
    token = service.create_token("user-1", "Alice")

    clock.advance(timedelta(days=31))

    with pytest.raises(JWTError, match="expired"):
        service.verify_token(token)


@pytest.mark.asyncio
async def test_malformed_token_is_rejected(unit_env):
    service = await unit_env.get(JWTService)

    with pytest.raises(JWTError, match="Invalid"):
        service.verify_token("not-a-token")
