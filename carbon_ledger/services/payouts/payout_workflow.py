"""
Payout workflow.

Scores the owner's activity logs and stores the payout with the status
the risk score decides:

    risk > 0.7        -> flagged_high_risk (flagged)
    0.4 < risk <= 0.7 -> pending_review    (flagged)
    risk <= 0.4       -> requested

If scoring fails for any reason the payout is still stored as
pending_review so the request is never lost.
"""

import inspect
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_ledger.database.repositories import (
    ActivityLogRepository,
    PayoutRepository,
)
from carbon_ledger.pydantic_models.ledger import PayoutDecision, PayoutPydModel
from carbon_ledger.pydantic_models.risk import AnomalyReport
from carbon_ledger.services.exceptions import InvalidAmount, StoreUnavailable
from carbon_ledger.services.risk.anomaly_scorer import AnomalyScorer
from carbon_ledger.utils.constants import (
    HIGH_RISK_THRESHOLD,
    REVIEW_RISK_THRESHOLD,
    PayoutStatus,
)

logger = logging.getLogger(__name__)

FLAGGED_MESSAGE = "Request submitted for review due to unusual activity patterns"
ACCEPTED_MESSAGE = "Payout requested successfully"
MANUAL_REVIEW_MESSAGE = "Request submitted for manual review"
SCORING_UNAVAILABLE_NOTE = "Automated anomaly scoring unavailable - manual review required"

# Match payouts.amount, Numeric(15, 6)
AMOUNT_QUANTUM = Decimal("0.000001")
MAX_AMOUNT = Decimal("1e9")


class Scorer(Protocol):
    """Anything that can score logs; ``score`` may be sync or async."""

    def score(
        self, owner_id: str, logs: Sequence[Any], requested_amount: Decimal
    ) -> Any: ...


def parse_amount(amount: Any) -> Decimal:
    """
    Validate a requested payout amount.

    Numeric strings are accepted. The amount is rounded to the stored
    scale of six decimal places.

    Raises:
        InvalidAmount: If the amount is missing, non-numeric, non-finite, not
            positive once rounded, or too large to store
    """
    if amount is None or isinstance(amount, bool):
        raise InvalidAmount(amount)

    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmount(amount)

    if not value.is_finite():
        raise InvalidAmount(amount)

    try:
        value = value.quantize(AMOUNT_QUANTUM)
    except InvalidOperation:
        raise InvalidAmount(amount)
    if value <= 0 or value >= MAX_AMOUNT:
        raise InvalidAmount(amount)
    return value


def decide_status(risk_score: float) -> tuple[PayoutStatus, bool]:
    """Map a risk score to (status, flagged)."""
    if risk_score > HIGH_RISK_THRESHOLD:
        return PayoutStatus.FLAGGED_HIGH_RISK, True
    if risk_score > REVIEW_RISK_THRESHOLD:
        return PayoutStatus.PENDING_REVIEW, True
    return PayoutStatus.REQUESTED, False


class PayoutWorkflow:
    """
    Creates payout records gated by the anomaly scorer.

    The requested amount is not checked against the current balance, and
    concurrent requests for one owner are not serialized.
    """

    def __init__(self, session: AsyncSession, scorer: Scorer | None = None):
        """
        Initialize workflow.

        Args:
            session: Async database session
            scorer: Anomaly scorer; defaults to the in-process rule scorer
        """
        self.session = session
        self.scorer = scorer or AnomalyScorer()
        self.activity_log_repo = ActivityLogRepository(session)
        self.payout_repo = PayoutRepository(session)

    async def _score(
        self, owner_id: str, logs: Sequence[Any], amount: Decimal
    ) -> AnomalyReport:
        result = self.scorer.score(owner_id, logs, amount)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def request_payout(self, owner_id: str, amount: Any) -> PayoutDecision:
        """
        Request a payout for an owner.

        Args:
            owner_id: Authenticated owner identity
            amount: Requested amount in tCO2e

        Returns:
            PayoutDecision with status, flagged, message and the stored payout

        Raises:
            InvalidAmount: If the amount is invalid; nothing is stored
            StoreUnavailable: If logs cannot be loaded or the payout cannot be stored
        """
        value = parse_amount(amount)

        try:
            logs = await self.activity_log_repo.list_by_owner(owner_id)
        except SQLAlchemyError as e:
            raise StoreUnavailable("payout request", e) from e

        try:
            report = await self._score(owner_id, logs, value)
        except Exception:
            logger.error(
                f"Anomaly scoring failed for {owner_id}; holding payout for manual review",
                exc_info=True,
            )
            payout = await self._store(
                owner_id=owner_id,
                amount=value,
                status=PayoutStatus.PENDING_REVIEW,
                flagged=True,
                notes=SCORING_UNAVAILABLE_NOTE,
            )
            return PayoutDecision(
                status=PayoutStatus.PENDING_REVIEW,
                flagged=True,
                message=MANUAL_REVIEW_MESSAGE,
                payout=payout,
            )

        status, flagged = decide_status(report.risk_score)
        payout = await self._store(
            owner_id=owner_id,
            amount=value,
            status=status,
            flagged=flagged,
            risk_score=report.risk_score,
            anomalies=[a.model_dump(mode="json") for a in report.anomalies],
            recommendations=report.recommendations,
        )

        logger.info(
            f"Payout of {value} tCO2e for {owner_id}: {status.value} "
            f"(risk {report.risk_score:.2f})"
        )

        return PayoutDecision(
            status=status,
            flagged=flagged,
            message=FLAGGED_MESSAGE if flagged else ACCEPTED_MESSAGE,
            payout=payout,
        )

    async def _store(self, **data: Any) -> PayoutPydModel:
        data["status"] = data["status"].value
        try:
            payout = await self.payout_repo.create(**data)
        except SQLAlchemyError as e:
            raise StoreUnavailable("payout persistence", e) from e
        return PayoutPydModel.model_validate(payout)
