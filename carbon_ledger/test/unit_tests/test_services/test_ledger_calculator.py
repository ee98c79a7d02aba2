"""
Tests for the credit ledger calculator.
"""
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from carbon_ledger.services.ledger import CoefficientTable, LedgerCalculator, build_snapshot
from carbon_ledger.test.factory.activity_log import ActivityLogFactory, TreePlantingLogFactory
from carbon_ledger.test.factory.payout import PayoutFactory
from carbon_ledger.utils.constants import PayoutStatus


def make_log(type, day, quantity=None):
    return SimpleNamespace(type=type, date=day, quantity=quantity)


class TestBuildSnapshot:
    def test_end_to_end_example(self):
        logs = [
            make_log("tree_planting", date(2024, 1, 10), Decimal("5")),
            make_log("plowing", date(2024, 1, 15), Decimal("2")),
        ]

        snapshot = build_snapshot(logs, [], CoefficientTable())

        assert snapshot.monthly == {"2024-01": Decimal("0.48")}
        assert snapshot.total == Decimal("0.48")
        assert snapshot.paid == Decimal("0")
        assert snapshot.balance == Decimal("0.48")
        assert snapshot.payouts == []

    def test_no_logs(self):
        snapshot = build_snapshot([], [], CoefficientTable())

        assert snapshot.total == 0
        assert snapshot.monthly == {}
        assert snapshot.balance == 0

    def test_emission_contributions_are_never_positive(self):
        table = CoefficientTable()
        for activity_type in ["plowing", "seeding", "harvesting", "machinery"]:
            snapshot = build_snapshot(
                [make_log(activity_type, date(2024, 3, 1), Decimal("7"))], [], table
            )
            assert snapshot.total <= 0

    def test_sequestration_contributions_are_never_negative(self):
        table = CoefficientTable()
        for activity_type in ["tree_planting", "cover_cropping"]:
            snapshot = build_snapshot(
                [make_log(activity_type, date(2024, 3, 1), Decimal("7"))], [], table
            )
            assert snapshot.total >= 0

    @pytest.mark.parametrize("quantity", [None, "abc", ""])
    def test_missing_quantity_counts_as_one(self, quantity):
        table = CoefficientTable()

        with_invalid = build_snapshot(
            [make_log("tree_planting", date(2024, 1, 1), quantity)], [], table
        )
        with_one = build_snapshot(
            [make_log("tree_planting", date(2024, 1, 1), 1)], [], table
        )

        assert with_invalid.total == with_one.total == Decimal("0.1")

    def test_monthly_buckets_sum_to_total(self):
        logs = [
            make_log("tree_planting", date(2024, 1, 10), 5),
            make_log("plowing", date(2024, 1, 31), 2),
            make_log("cover_cropping", date(2024, 2, 1), "1.5"),
            make_log("machinery", date(2024, 12, 24), 3),
            make_log("composting", date(2025, 1, 1), 10),
        ]

        snapshot = build_snapshot(logs, [], CoefficientTable())

        assert set(snapshot.monthly) == {"2024-01", "2024-02", "2024-12", "2025-01"}
        assert sum(snapshot.monthly.values()) == snapshot.total
        assert snapshot.monthly["2025-01"] == 0


@pytest.mark.asyncio
async def test_compute_ledger_from_store(test_db_session):
    await TreePlantingLogFactory(date=date(2024, 1, 10), quantity=Decimal("5"))
    await ActivityLogFactory(type="plowing", date=date(2024, 1, 15), quantity=Decimal("2"))
    await TreePlantingLogFactory(owner_id="farmer-002", quantity=Decimal("100"))

    calculator = LedgerCalculator(test_db_session, CoefficientTable())
    snapshot = await calculator.compute_ledger("farmer-001")

    assert snapshot.total == Decimal("0.48")
    assert snapshot.monthly == {"2024-01": Decimal("0.48")}
    assert snapshot.balance == Decimal("0.48")


@pytest.mark.asyncio
async def test_compute_ledger_counts_every_payout(test_db_session):
    await TreePlantingLogFactory(date=date(2024, 1, 10), quantity=Decimal("10"))
    await PayoutFactory(amount=Decimal("0.25"))
    await PayoutFactory(
        amount=Decimal("0.5"),
        status=PayoutStatus.FLAGGED_HIGH_RISK.value,
        flagged=True,
        risk_score=0.9,
    )
    await PayoutFactory(owner_id="farmer-002", amount=Decimal("3"))

    calculator = LedgerCalculator(test_db_session, CoefficientTable())
    snapshot = await calculator.compute_ledger("farmer-001")

    assert snapshot.total == Decimal("1")
    assert snapshot.paid == Decimal("0.75")
    assert snapshot.balance == snapshot.total - snapshot.paid
    assert len(snapshot.payouts) == 2


@pytest.mark.asyncio
async def test_compute_ledger_is_idempotent(test_db_session):
    await TreePlantingLogFactory(quantity=Decimal("3"))
    await PayoutFactory(amount=Decimal("0.1"))

    calculator = LedgerCalculator(test_db_session, CoefficientTable())
    first = await calculator.compute_ledger("farmer-001")
    second = await calculator.compute_ledger("farmer-001")

    assert first == second


@pytest.mark.asyncio
async def test_compute_ledger_uses_injected_coefficients(test_db_session):
    await TreePlantingLogFactory(quantity=Decimal("2"))

    table = CoefficientTable.with_overrides({"tree_planting": "0.5"})
    snapshot = await LedgerCalculator(test_db_session, table).compute_ledger("farmer-001")

    assert snapshot.total == Decimal("1")
