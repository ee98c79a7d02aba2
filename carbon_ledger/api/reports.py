"""
Reports API router.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.core.dependencies import CurrentUser, get_current_user, get_db_session
from carbon_ledger.pydantic_models.report import FarmerReport
from carbon_ledger.services.exceptions import StoreUnavailable
from carbon_ledger.services.reports import FarmerReportService

router = APIRouter(
    prefix="/api/reports",
    tags=["Reports"],
)

logger = logging.getLogger(__name__)


@router.get("/farmer", response_model=FarmerReport)
async def farmer_report(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Monthly emission and savings quantities for the caller."""
    try:
        return await FarmerReportService(session).build(user.id)
    except StoreUnavailable as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )
