"""
Pydantic models for the credit ledger and payouts.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from carbon_ledger.pydantic_models.risk import AnomalyPydModel
from carbon_ledger.utils.constants import PayoutStatus


class PayoutPydModel(BaseModel):
    """Model for payout response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: str
    amount: Decimal
    status: PayoutStatus
    flagged: bool
    risk_score: float | None = Field(None, ge=0, le=1)
    anomalies: list[AnomalyPydModel] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    notes: str | None = None
    created_at: datetime


class LedgerSnapshot(BaseModel):
    """Credit balance recomputed from an owner's logs and payouts."""

    total: Decimal = Field(
        ...,
        description="Net tCO2e over all activity logs",
        examples=[Decimal("0.48")],
    )
    monthly: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Net tCO2e per YYYY-MM",
        examples=[{"2024-01": Decimal("0.48")}],
    )
    paid: Decimal = Field(
        ...,
        description="Sum of all payout amounts regardless of status",
        examples=[Decimal("0")],
    )
    balance: Decimal = Field(
        ...,
        description="total - paid; may be negative",
        examples=[Decimal("0.48")],
    )
    payouts: list[PayoutPydModel] = Field(default_factory=list)


class PayoutRequest(BaseModel):
    """
    Request model for a payout.

    The amount is validated by the payout workflow so that missing or
    non-numeric values are reported as an invalid amount.
    """

    amount: Any = Field(None, description="Requested amount in tCO2e", examples=[0.25])


class PayoutDecision(BaseModel):
    """Outcome of a payout request."""

    status: PayoutStatus
    flagged: bool
    message: str
    payout: PayoutPydModel


class PayoutResponse(BaseModel):
    """Response for a payout request."""

    ok: bool = True
    status: PayoutStatus
    flagged: bool
    message: str
    payout_id: UUID
