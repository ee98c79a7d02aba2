"""
Pydantic models for farmer reports.
"""
from decimal import Decimal

from pydantic import BaseModel, Field


class MonthlyActivityTotals(BaseModel):
    """Summed quantities for one month."""

    emissions: Decimal = Decimal("0")
    savings: Decimal = Decimal("0")


class FarmerReport(BaseModel):
    """Per-month activity quantities split into emissions and savings."""

    by_month: dict[str, MonthlyActivityTotals] = Field(default_factory=dict)
