"""
Tests for the farmer monthly report.
"""
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from carbon_ledger.services.reports import FarmerReportService, summarize_by_month
from carbon_ledger.test.factory.activity_log import ActivityLogFactory, TreePlantingLogFactory


def test_summarize_by_month_splits_emissions_and_savings():
    logs = [
        SimpleNamespace(type="plowing", date=date(2024, 1, 15), quantity=Decimal("2")),
        SimpleNamespace(type="machinery", date=date(2024, 1, 20), quantity=None),
        SimpleNamespace(type="tree_planting", date=date(2024, 1, 10), quantity=Decimal("5")),
        SimpleNamespace(type="composting", date=date(2024, 2, 2), quantity="3"),
    ]

    report = summarize_by_month(logs)

    assert report.by_month["2024-01"].emissions == Decimal("3")
    assert report.by_month["2024-01"].savings == Decimal("5")
    assert report.by_month["2024-02"].emissions == Decimal("0")
    assert report.by_month["2024-02"].savings == Decimal("3")


@pytest.mark.asyncio
async def test_report_only_covers_owner(test_db_session):
    await TreePlantingLogFactory(date=date(2024, 3, 1), quantity=Decimal("4"))
    await ActivityLogFactory(date=date(2024, 3, 2), quantity=Decimal("1.5"))
    await ActivityLogFactory(owner_id="farmer-002", date=date(2024, 4, 1))

    report = await FarmerReportService(test_db_session).build("farmer-001")

    assert list(report.by_month) == ["2024-03"]
    assert report.by_month["2024-03"].savings == Decimal("4")
    assert report.by_month["2024-03"].emissions == Decimal("1.5")
