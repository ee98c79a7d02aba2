"""
API tests for farmer reports.
"""
from datetime import date
from decimal import Decimal

import pytest

from carbon_ledger.test.factory.activity_log import ActivityLogFactory, TreePlantingLogFactory


@pytest.mark.asyncio
async def test_farmer_report(test_async_client, farmer_headers):
    await TreePlantingLogFactory(date=date(2024, 1, 10), quantity=Decimal("5"))
    await ActivityLogFactory(type="plowing", date=date(2024, 1, 15), quantity=Decimal("2"))
    await ActivityLogFactory(type="machinery", date=date(2024, 3, 1), quantity=None)

    response = await test_async_client.get("/api/reports/farmer", headers=farmer_headers)
    assert response.status_code == 200

    by_month = response.json()["by_month"]
    assert set(by_month) == {"2024-01", "2024-03"}
    assert Decimal(by_month["2024-01"]["savings"]) == Decimal("5")
    assert Decimal(by_month["2024-01"]["emissions"]) == Decimal("2")
    assert Decimal(by_month["2024-03"]["emissions"]) == Decimal("1")


@pytest.mark.asyncio
async def test_farmer_report_requires_token(test_async_client):
    response = await test_async_client.get("/api/reports/farmer")
    assert response.status_code == 401
