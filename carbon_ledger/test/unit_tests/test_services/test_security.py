"""
Tests for bearer token helpers.
"""
from datetime import timedelta

import jwt
import pytest

from carbon_ledger.core.security import InvalidToken, create_access_token, decode_access_token
from carbon_ledger.utils.constants import UserRole

SECRET = "security-test-secret-with-at-least-32-bytes"


def test_round_trip_defaults_to_farmer_role():
    claims = decode_access_token(create_access_token("farmer-001", SECRET), SECRET)

    assert claims["_id"] == "farmer-001"
    assert claims["role"] == UserRole.FARMER


def test_sub_claim_is_accepted():
    token = jwt.encode({"sub": "farmer-009"}, SECRET, algorithm="HS256")

    assert decode_access_token(token, SECRET)["_id"] == "farmer-009"


@pytest.mark.parametrize(
    "token",
    [
        create_access_token("farmer-001", SECRET, expires_in=timedelta(seconds=-10)),
        create_access_token("farmer-001", "some-other-secret-of-sufficient-length"),
        jwt.encode({"role": "farmer"}, SECRET, algorithm="HS256"),
        "garbage",
    ],
)
def test_rejected_tokens(token):
    with pytest.raises(InvalidToken):
        decode_access_token(token, SECRET)


@pytest.mark.asyncio
async def test_expired_token_is_unauthorized(test_async_client, test_config):
    token = create_access_token(
        "farmer-001", test_config.jwt_secret, expires_in=timedelta(seconds=-10)
    )

    response = await test_async_client.get(
        "/api/credits", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized: Token has expired"
