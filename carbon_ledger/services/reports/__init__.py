"""
Farmer-facing reports.
"""
from carbon_ledger.services.reports.farmer_report import (
    FarmerReportService,
    summarize_by_month,
)

__all__ = ["FarmerReportService", "summarize_by_month"]
