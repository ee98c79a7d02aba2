"""
Credit ledger calculator.

Recomputes an owner's carbon-credit balance from scratch on every call:
activity logs are converted to signed tCO2e deltas, bucketed by month,
and netted against every payout recorded for the owner.
"""

import logging
from decimal import Decimal
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import (
    ActivityLogRepository,
    PayoutRepository,
)
from carbon_ledger.database.schemas import ActivityLogDBModel, PayoutDBModel
from carbon_ledger.pydantic_models.ledger import LedgerSnapshot, PayoutPydModel
from carbon_ledger.services.exceptions import StoreUnavailable
from carbon_ledger.services.ledger.coefficients import CoefficientTable

logger = logging.getLogger(__name__)


def month_key(log: ActivityLogDBModel) -> str:
    """YYYY-MM bucket of a log."""
    return log.date.isoformat()[:7]


def build_snapshot(
    logs: Iterable[ActivityLogDBModel],
    payouts: Iterable[PayoutDBModel],
    coefficients: CoefficientTable,
) -> LedgerSnapshot:
    """
    Aggregate logs and payouts into a ledger snapshot.

    Every log contributes ``coefficient(type) * quantity`` to both the
    total and its month, so the monthly values always sum to the total.

    Example:
        tree_planting x5 (+0.1) and plowing x2 (-0.01) in January 2024
        give monthly {"2024-01": 0.48}, total 0.48.
    """
    total = Decimal("0")
    monthly: dict[str, Decimal] = {}

    for log in logs:
        delta = coefficients.delta(log.type, log.quantity)
        key = month_key(log)
        monthly[key] = monthly.get(key, Decimal("0")) + delta
        total += delta

    payouts = list(payouts)
    paid = sum((Decimal(str(p.amount or 0)) for p in payouts), Decimal("0"))

    return LedgerSnapshot(
        total=total,
        monthly=monthly,
        paid=paid,
        balance=total - paid,
        payouts=[PayoutPydModel.model_validate(p) for p in payouts],
    )


class LedgerCalculator:
    """
    Service computing the credit ledger of an owner.

    Read-only; holds no state between calls.
    """

    def __init__(self, session: AsyncSession, coefficients: CoefficientTable):
        """
        Initialize calculator.

        Args:
            session: Async database session
            coefficients: Coefficient table loaded at startup
        """
        self.session = session
        self.coefficients = coefficients
        self.activity_log_repo = ActivityLogRepository(session)
        self.payout_repo = PayoutRepository(session)

    async def compute_ledger(self, owner_id: str) -> LedgerSnapshot:
        """
        Compute the ledger snapshot of an owner.

        Args:
            owner_id: Authenticated owner identity

        Returns:
            LedgerSnapshot with total, monthly, paid, balance and payouts

        Raises:
            StoreUnavailable: If logs or payouts cannot be loaded
        """
        try:
            logs = await self.activity_log_repo.list_by_owner(owner_id)
            payouts = await self.payout_repo.list_by_owner(owner_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load ledger records for {owner_id}: {e}")
            raise StoreUnavailable("ledger computation", e) from e

        snapshot = build_snapshot(logs, payouts, self.coefficients)

        logger.info(
            f"Computed ledger for {owner_id}: {len(logs)} logs, "
            f"{len(snapshot.payouts)} payouts, balance {snapshot.balance} tCO2e"
        )
        return snapshot
