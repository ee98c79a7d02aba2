"""
Pydantic models for anomaly scoring.
"""
from datetime import date as DateType
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from carbon_ledger.utils.constants import MAX_TIME_WINDOW_DAYS, Severity


class AnomalyPydModel(BaseModel):
    """A detected anomaly."""

    type: str = Field(..., examples=["temporal_spike"])
    severity: Severity
    description: str


class AnomalyReport(BaseModel):
    """Risk assessment of an owner's activity logs."""

    risk_score: float = Field(..., ge=0, le=1)
    anomalies: list[AnomalyPydModel] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ActivityLogInput(BaseModel):
    """Activity log as submitted for scoring; quantity is taken as-is."""

    type: str = ""
    date: DateType | None = None
    quantity: Any = None
    created_at: datetime | None = None


class AnomalyCheckRequest(BaseModel):
    """Request model for the anomaly check endpoint."""

    activity_logs: list[ActivityLogInput] | None = None
    requested_amount: float | None = None
    time_window: str = Field("30d", pattern=r"^\d+d$", examples=["30d"])

    @field_validator("time_window")
    @classmethod
    def check_window_length(cls, value: str) -> str:
        if int(value[:-1]) > MAX_TIME_WINDOW_DAYS:
            raise ValueError(f"time_window must be at most {MAX_TIME_WINDOW_DAYS}d")
        return value
