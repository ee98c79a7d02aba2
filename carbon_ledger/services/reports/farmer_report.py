"""
Monthly activity report for a farmer.

Sums normalized quantities per month, split into emission-type
activities and everything else (savings).
"""

import logging
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import ActivityLogRepository
from carbon_ledger.database.schemas import ActivityLogDBModel
from carbon_ledger.pydantic_models.report import FarmerReport, MonthlyActivityTotals
from carbon_ledger.services.exceptions import StoreUnavailable
from carbon_ledger.services.ledger.coefficients import normalize_quantity
from carbon_ledger.services.ledger.ledger_calculator import month_key
from carbon_ledger.utils.constants import EMISSION_ACTIVITY_TYPES

logger = logging.getLogger(__name__)


def summarize_by_month(logs: Iterable[ActivityLogDBModel]) -> FarmerReport:
    by_month: dict[str, MonthlyActivityTotals] = {}
    for log in logs:
        totals = by_month.setdefault(month_key(log), MonthlyActivityTotals())
        value = normalize_quantity(log.quantity)
        if log.type in EMISSION_ACTIVITY_TYPES:
            totals.emissions += value
        else:
            totals.savings += value
    return FarmerReport(by_month=by_month)


class FarmerReportService:
    """Builds the monthly activity report of an owner."""

    def __init__(self, session: AsyncSession):
        self.activity_log_repo = ActivityLogRepository(session)

    async def build(self, owner_id: str) -> FarmerReport:
        try:
            logs = await self.activity_log_repo.list_by_owner(owner_id)
        except SQLAlchemyError as e:
            raise StoreUnavailable("farmer report", e) from e

        logger.info(f"Building farmer report for {owner_id} from {len(logs)} logs")
        return summarize_by_month(logs)
