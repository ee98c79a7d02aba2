"""
HTTP client for an external anomaly-check endpoint.

Used instead of the in-process scorer when ``[risk] scoring_url`` is set.
The remote service receives the same payload as ``POST /api/ml/anomaly-check``.
"""

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Any, Sequence

import httpx
from pydantic import ValidationError

from carbon_ledger.core.security import create_access_token
from carbon_ledger.pydantic_models.risk import AnomalyReport
from carbon_ledger.services.exceptions import ScoringUnavailable

logger = logging.getLogger(__name__)

INTERNAL_TOKEN_LIFETIME = timedelta(minutes=5)


def serialize_log(log: Any) -> dict[str, Any]:
    """JSON-safe view of a log for the scoring payload."""
    log_date = getattr(log, "date", None)
    created_at = getattr(log, "created_at", None)
    quantity = getattr(log, "quantity", None)
    return {
        "type": getattr(log, "type", ""),
        "date": log_date.isoformat() if log_date else None,
        "quantity": str(quantity) if isinstance(quantity, Decimal) else quantity,
        "created_at": created_at.isoformat() if created_at else None,
    }


class RemoteAnomalyScorer:
    """Scores logs by calling a remote anomaly-check endpoint."""

    def __init__(
        self,
        scoring_url: str,
        jwt_secret: str,
        jwt_algorithm: str = "HS256",
        timeout_seconds: float = 5.0,
        time_window_days: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.scoring_url = scoring_url
        self.jwt_secret = jwt_secret
        self.jwt_algorithm = jwt_algorithm
        self.timeout_seconds = timeout_seconds
        self.time_window_days = time_window_days
        self._transport = transport

    async def score(
        self,
        owner_id: str,
        logs: Sequence[Any],
        requested_amount: Decimal | float | None = None,
    ) -> AnomalyReport:
        """
        Request a risk report for an owner's logs.

        Raises:
            ScoringUnavailable: On transport errors, non-2xx responses or
                malformed response bodies
        """
        token = create_access_token(
            owner_id,
            self.jwt_secret,
            self.jwt_algorithm,
            expires_in=INTERNAL_TOKEN_LIFETIME,
            internal=True,
        )
        payload = {
            "activity_logs": [serialize_log(log) for log in logs],
            "time_window": f"{self.time_window_days}d",
            "requested_amount": (
                float(requested_amount) if requested_amount is not None else None
            ),
        }

        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self._transport
        ) as client:
            try:
                response = await client.post(
                    self.scoring_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {token}"},
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise ScoringUnavailable(f"Anomaly check failed: {e}") from e

        try:
            return AnomalyReport.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ScoringUnavailable(f"Malformed anomaly report: {e}") from e
