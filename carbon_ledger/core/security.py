"""
Bearer token helpers (PyJWT).

Tokens carry the owner id in ``_id`` (``sub`` is accepted too) and an
optional ``role``.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from carbon_ledger.utils.constants import UserRole

logger = logging.getLogger(__name__)


class InvalidToken(Exception):
    """Token is missing, malformed, expired or carries no identity."""


def create_access_token(
    owner_id: str,
    secret: str,
    algorithm: str = "HS256",
    role: str = UserRole.FARMER,
    expires_in: timedelta | None = None,
    **claims: Any,
) -> str:
    """
    Sign a token for an owner.

    Args:
        owner_id: Owner identity
        secret: Signing secret
        algorithm: JWT algorithm
        role: Role claim
        expires_in: Optional lifetime
        **claims: Extra claims

    Returns:
        Encoded JWT
    """
    payload = {"_id": owner_id, "role": role, **claims}
    if expires_in is not None:
        payload["exp"] = datetime.now(timezone.utc) + expires_in
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> dict:
    """
    Verify a token and return its claims.

    Raises:
        InvalidToken: If verification fails or no identity claim is present
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("Token has expired") from e
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        raise InvalidToken("Invalid token") from e

    owner_id = payload.get("_id") or payload.get("sub")
    if not owner_id:
        raise InvalidToken("Invalid token payload")

    payload["_id"] = str(owner_id)
    return payload
