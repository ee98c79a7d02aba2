"""
Rule-based anomaly scorer for payout requests.

Scores an owner's activity logs with fixed thresholds on simple
statistics (log count, type diversity, recency and quantity spread).

Risk contributions:
    - more than 50 logs: +0.2
    - fewer than 3 distinct activity types: +0.1
    - temporal spike (score 0.7): +0.7 * 0.3
    - volume spike (score 0.6): +0.6 * 0.4

The sum is capped at 1.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable, Sequence

from carbon_ledger.pydantic_models.risk import AnomalyPydModel, AnomalyReport
from carbon_ledger.services.ledger.coefficients import normalize_quantity
from carbon_ledger.utils.constants import (
    DEFAULT_TIME_WINDOW_DAYS,
    HIGH_RISK_THRESHOLD,
    REVIEW_RISK_THRESHOLD,
    AnomalyType,
    Severity,
)

logger = logging.getLogger(__name__)

HIGH_FREQUENCY_LOG_COUNT = 50
HIGH_FREQUENCY_RISK = 0.2
MIN_DISTINCT_TYPES = 3
LOW_DIVERSITY_RISK = 0.1

RECENT_SHARE_THRESHOLD = 0.8
TEMPORAL_SPIKE_SCORE = 0.7
TEMPORAL_SPIKE_WEIGHT = 0.3

VOLUME_SPIKE_RATIO = 5
VOLUME_SPIKE_SCORE = 0.6
VOLUME_SPIKE_WEIGHT = 0.4


@dataclass
class ActivityPatterns:
    """Summary statistics of a set of logs."""

    frequency: int
    types: set[str]
    quantities: list[Decimal]


@dataclass
class DetectedAnomaly:
    """Anomaly with its raw score, before severity bucketing."""

    type: str
    score: float
    description: str


def severity_for(score: float) -> Severity:
    """Bucket an anomaly score: > 0.8 high, > 0.5 medium, else low."""
    if score > 0.8:
        return Severity.HIGH
    if score > 0.5:
        return Severity.MEDIUM
    return Severity.LOW


def scoring_quantity(quantity: Any) -> Decimal:
    """
    Quantity used for volume statistics.

    Unlike the ledger, a zero quantity counts as 1 here.
    """
    value = normalize_quantity(quantity)
    return value if value else Decimal("1")


def _log_datetime(log: Any) -> datetime | None:
    value = getattr(log, "date", None) or getattr(log, "created_at", None)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            # Compared against a naive UTC clock
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return None


class AnomalyScorer:
    """
    Scores activity logs for payout risk.

    Pure apart from the injected clock used for the recency check.
    Logs may be database models or any object exposing ``type``,
    ``date`` and ``quantity`` attributes.
    """

    def __init__(
        self,
        now: Callable[[], datetime] = datetime.utcnow,
        time_window_days: int = DEFAULT_TIME_WINDOW_DAYS,
    ):
        self.now = now
        self.time_window_days = time_window_days

    def analyze_patterns(self, logs: Sequence[Any]) -> ActivityPatterns:
        return ActivityPatterns(
            frequency=len(logs),
            types={getattr(log, "type", None) for log in logs},
            quantities=[scoring_quantity(getattr(log, "quantity", None)) for log in logs],
        )

    def detect_temporal_anomalies(self, logs: Sequence[Any]) -> list[DetectedAnomaly]:
        """Flag when more than 80% of the logs fall inside the recent window."""
        cutoff = self.now() - timedelta(days=self.time_window_days)
        recent = 0
        for log in logs:
            logged_at = _log_datetime(log)
            if logged_at is not None and logged_at > cutoff:
                recent += 1

        if recent > len(logs) * RECENT_SHARE_THRESHOLD:
            return [
                DetectedAnomaly(
                    type=AnomalyType.TEMPORAL_SPIKE,
                    score=TEMPORAL_SPIKE_SCORE,
                    description="Unusual concentration of recent activities",
                )
            ]
        return []

    def detect_volume_anomalies(self, patterns: ActivityPatterns) -> list[DetectedAnomaly]:
        """Flag when the largest quantity exceeds five times the average."""
        if not patterns.quantities:
            return []

        average = sum(patterns.quantities, Decimal("0")) / len(patterns.quantities)
        largest = max(patterns.quantities)

        if largest > average * VOLUME_SPIKE_RATIO:
            return [
                DetectedAnomaly(
                    type=AnomalyType.VOLUME_SPIKE,
                    score=VOLUME_SPIKE_SCORE,
                    description="Unusually large quantity reported in single entry",
                )
            ]
        return []

    @staticmethod
    def calculate_risk_score(
        patterns: ActivityPatterns,
        temporal_anomalies: list[DetectedAnomaly],
        volume_anomalies: list[DetectedAnomaly],
    ) -> float:
        risk = 0.0
        if patterns.frequency > HIGH_FREQUENCY_LOG_COUNT:
            risk += HIGH_FREQUENCY_RISK
        if len(patterns.types) < MIN_DISTINCT_TYPES:
            risk += LOW_DIVERSITY_RISK

        for anomaly in temporal_anomalies:
            risk += anomaly.score * TEMPORAL_SPIKE_WEIGHT
        for anomaly in volume_anomalies:
            risk += anomaly.score * VOLUME_SPIKE_WEIGHT

        return max(0.0, min(1.0, risk))

    @staticmethod
    def generate_recommendations(
        risk_score: float, anomalies: list[AnomalyPydModel]
    ) -> list[str]:
        recommendations = []

        if risk_score > HIGH_RISK_THRESHOLD:
            recommendations.append("High risk detected - manual review recommended")
            recommendations.append(
                "Verify large quantity entries with supporting documentation"
            )
        elif risk_score > REVIEW_RISK_THRESHOLD:
            recommendations.append("Medium risk - additional verification may be needed")
        else:
            recommendations.append("Low risk - normal activity pattern detected")

        anomaly_types = {anomaly.type for anomaly in anomalies}
        if AnomalyType.TEMPORAL_SPIKE in anomaly_types:
            recommendations.append(
                "Recent activity spike detected - verify timing and authenticity"
            )
        if AnomalyType.VOLUME_SPIKE in anomaly_types:
            recommendations.append(
                "Large quantity entries detected - verify measurements and methods"
            )

        return recommendations

    def score(
        self,
        owner_id: str,
        logs: Sequence[Any],
        requested_amount: Decimal | float | None = None,
    ) -> AnomalyReport:
        """
        Score an owner's logs.

        Args:
            owner_id: Owner identity (used for logging only)
            logs: The owner's activity logs
            requested_amount: Payout amount being requested; not part of the rules

        Returns:
            AnomalyReport with risk score, anomalies and recommendations
        """
        logs = list(logs)
        patterns = self.analyze_patterns(logs)
        temporal_anomalies = self.detect_temporal_anomalies(logs)
        volume_anomalies = self.detect_volume_anomalies(patterns)

        risk_score = self.calculate_risk_score(
            patterns, temporal_anomalies, volume_anomalies
        )

        anomalies = [
            AnomalyPydModel(
                type=anomaly.type,
                severity=severity_for(anomaly.score),
                description=anomaly.description,
            )
            for anomaly in temporal_anomalies + volume_anomalies
        ]

        if anomalies:
            logger.warning(
                f"Detected {[a.type for a in anomalies]} for {owner_id} "
                f"(risk {risk_score:.2f}, requested {requested_amount})"
            )

        return AnomalyReport(
            risk_score=risk_score,
            anomalies=anomalies,
            recommendations=self.generate_recommendations(risk_score, anomalies),
        )
