"""
Credits API router.

Ledger balance and payout requests for the authenticated farmer.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.core.dependencies import (
    CurrentUser,
    get_anomaly_scorer,
    get_coefficient_table,
    get_current_user,
    get_db_session,
)
from carbon_ledger.pydantic_models.ledger import (
    LedgerSnapshot,
    PayoutRequest,
    PayoutResponse,
)
from carbon_ledger.services.exceptions import InvalidAmount, StoreUnavailable
from carbon_ledger.services.ledger import CoefficientTable, LedgerCalculator
from carbon_ledger.services.payouts import PayoutWorkflow
from carbon_ledger.services.payouts.payout_workflow import Scorer

router = APIRouter(
    prefix="/api/credits",
    tags=["Credits"],
)

logger = logging.getLogger(__name__)


@router.get("", response_model=LedgerSnapshot)
async def get_ledger(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
    coefficients: CoefficientTable = Depends(get_coefficient_table),
):
    """
    Get the caller's credit ledger.

    Recomputed from all activity logs and payouts on every call.
    """
    calculator = LedgerCalculator(session, coefficients)
    try:
        return await calculator.compute_ledger(user.id)
    except StoreUnavailable as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )


@router.post("/payouts", response_model=PayoutResponse)
async def request_payout(
    request: PayoutRequest,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
    scorer: Scorer = Depends(get_anomaly_scorer),
):
    """
    Request a payout.

    The request is scored for anomalies and stored as requested,
    pending_review or flagged_high_risk.

    Example:
        ```
        POST /api/credits/payouts
        {"amount": 0.25}
        ```
    """
    workflow = PayoutWorkflow(session, scorer=scorer)
    try:
        decision = await workflow.request_payout(user.id, request.amount)
        await session.commit()
    except InvalidAmount:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid amount",
        )
    except StoreUnavailable as e:
        logger.error(f"Payout request failed for {user.id}: {e}")
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )

    return PayoutResponse(
        status=decision.status,
        flagged=decision.flagged,
        message=decision.message,
        payout_id=decision.payout.id,
    )
