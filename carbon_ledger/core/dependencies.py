"""
FastAPI dependencies: database sessions, caller identity and the
process-wide services stored on ``app.state``.
"""
import logging
from dataclasses import dataclass
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.core.security import InvalidToken, decode_access_token
from carbon_ledger.database.session_manager.db_session import Database
from carbon_ledger.services.ledger.coefficients import CoefficientTable
from carbon_ledger.services.payouts.payout_workflow import Scorer
from carbon_ledger.utils.constants import UserRole

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller."""

    id: str
    role: str = UserRole.FARMER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for the duration of a request."""
    async with Database() as session:
        yield session


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser:
    """
    Resolve the caller from a Bearer token.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    config = request.app.state.config
    try:
        payload = decode_access_token(
            credentials.credentials, config.jwt_secret, config.jwt_algorithm
        )
    except InvalidToken as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unauthorized: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return CurrentUser(id=payload["_id"], role=payload.get("role") or UserRole.FARMER)


def get_coefficient_table(request: Request) -> CoefficientTable:
    return request.app.state.coefficients


def get_anomaly_scorer(request: Request) -> Scorer:
    return request.app.state.anomaly_scorer
