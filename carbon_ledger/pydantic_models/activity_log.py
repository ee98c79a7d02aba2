"""
Pydantic models for activity logs.
"""

from datetime import date as DateType
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ActivityLogBase(BaseModel):
    """Base activity log model."""

    type: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Activity type",
        examples=["tree_planting"],
    )
    date: DateType = Field(..., description="Date of activity", examples=["2024-01-10"])
    quantity: Decimal | None = Field(
        None,
        ge=0,
        description="Quantity in activity units; missing counts as 1",
        examples=[Decimal("5")],
    )
    unit: str | None = Field(None, max_length=50, description="Free-text unit")
    notes: str = Field("", description="Free-text notes")


class ActivityLogCreate(ActivityLogBase):
    """Model for appending an activity log."""


class ActivityLogPydModel(ActivityLogBase):
    """Model for activity log response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: str
    raw_data: dict[str, Any] | None = None
    created_at: datetime


class ActivityLogListResponse(BaseModel):
    """List of an owner's activity logs."""

    logs: list[ActivityLogPydModel]


class DeleteResponse(BaseModel):
    """Acknowledgement of a delete."""

    ok: bool = True
