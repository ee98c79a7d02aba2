"""
Payout risk scoring.
"""
from carbon_ledger.services.risk.anomaly_scorer import AnomalyScorer, severity_for
from carbon_ledger.services.risk.remote_scorer import RemoteAnomalyScorer

__all__ = ["AnomalyScorer", "RemoteAnomalyScorer", "severity_for"]
