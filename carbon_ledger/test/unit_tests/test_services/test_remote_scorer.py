"""
Tests for the remote anomaly scorer client.
"""
import json
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import httpx
import pytest

from carbon_ledger.core.security import decode_access_token
from carbon_ledger.services.exceptions import ScoringUnavailable
from carbon_ledger.services.payouts import PayoutWorkflow
from carbon_ledger.services.risk import RemoteAnomalyScorer
from carbon_ledger.services.risk.remote_scorer import serialize_log
from carbon_ledger.utils.constants import PayoutStatus

SCORING_URL = "http://risk.internal/api/ml/anomaly-check"
SECRET = "remote-scorer-test-secret-with-enough-bytes"

LOGS = [
    SimpleNamespace(
        type="plowing",
        date=date(2024, 1, 15),
        quantity=Decimal("2.0000"),
        created_at=datetime(2024, 1, 15, 8, 30),
    ),
    SimpleNamespace(type="irrigation", date=date(2024, 2, 1), quantity=None, created_at=None),
]


def make_scorer(handler):
    return RemoteAnomalyScorer(
        SCORING_URL,
        jwt_secret=SECRET,
        time_window_days=14,
        transport=httpx.MockTransport(handler),
    )


def test_serialize_log():
    assert serialize_log(LOGS[0]) == {
        "type": "plowing",
        "date": "2024-01-15",
        "quantity": "2.0000",
        "created_at": "2024-01-15T08:30:00",
    }
    assert serialize_log(LOGS[1])["quantity"] is None


@pytest.mark.asyncio
async def test_score_posts_logs_and_parses_report():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["token"] = request.headers["Authorization"].removeprefix("Bearer ")
        return httpx.Response(
            200,
            json={
                "risk_score": 0.45,
                "anomalies": [
                    {
                        "type": "temporal_spike",
                        "severity": "medium",
                        "description": "Unusual concentration of recent activities",
                    }
                ],
                "recommendations": ["Medium risk - additional verification may be needed"],
            },
        )

    report = await make_scorer(handler).score("farmer-001", LOGS, Decimal("0.5"))

    assert report.risk_score == pytest.approx(0.45)
    assert report.anomalies[0].type == "temporal_spike"
    assert seen["body"]["time_window"] == "14d"
    assert seen["body"]["requested_amount"] == 0.5
    assert [log["type"] for log in seen["body"]["activity_logs"]] == ["plowing", "irrigation"]

    claims = decode_access_token(seen["token"], SECRET)
    assert claims["_id"] == "farmer-001"
    assert claims["internal"] is True
    assert "exp" in claims


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"detail": "Anomaly detection failed"}),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"risk_score": 7}),
        httpx.Response(200, json={"anomalies": []}),
    ],
)
async def test_bad_responses_raise_scoring_unavailable(response):
    scorer = make_scorer(lambda request: response)

    with pytest.raises(ScoringUnavailable):
        await scorer.score("farmer-001", LOGS)


@pytest.mark.asyncio
async def test_transport_error_raises_scoring_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ScoringUnavailable):
        await make_scorer(handler).score("farmer-001", LOGS)


@pytest.mark.asyncio
async def test_unreachable_scorer_holds_payout_for_review(test_db_session):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    decision = await PayoutWorkflow(
        test_db_session, scorer=make_scorer(handler)
    ).request_payout("farmer-001", 1)

    assert decision.status == PayoutStatus.PENDING_REVIEW
    assert decision.flagged is True
    assert decision.payout.risk_score is None
