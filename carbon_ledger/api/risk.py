"""
Anomaly check API router.

Exposes the rule-based scorer so logs can be checked before a payout.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from carbon_ledger.core.dependencies import CurrentUser, get_current_user
from carbon_ledger.pydantic_models.risk import AnomalyCheckRequest, AnomalyReport
from carbon_ledger.services.risk import AnomalyScorer

router = APIRouter(
    prefix="/api/ml",
    tags=["Risk"],
)

logger = logging.getLogger(__name__)


@router.post("/anomaly-check", response_model=AnomalyReport)
async def anomaly_check(
    request: AnomalyCheckRequest,
    user: CurrentUser = Depends(get_current_user),
):
    """
    Score the submitted activity logs.

    Example:
        ```
        POST /api/ml/anomaly-check
        {"activity_logs": [{"type": "plowing", "date": "2024-01-15", "quantity": 2}],
         "time_window": "30d"}
        ```
    """
    if request.activity_logs is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Activity logs required",
        )

    scorer = AnomalyScorer(time_window_days=int(request.time_window.rstrip("d")))
    return scorer.score(user.id, request.activity_logs, request.requested_amount)
