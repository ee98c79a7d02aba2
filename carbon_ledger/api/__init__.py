"""
API routers module.
"""
from carbon_ledger.api.activity_logs import router as activity_logs_router
from carbon_ledger.api.credits import router as credits_router
from carbon_ledger.api.reports import router as reports_router
from carbon_ledger.api.risk import router as risk_router

__all__ = [
    "activity_logs_router",
    "credits_router",
    "reports_router",
    "risk_router",
]
