"""
SQLAlchemy database models (schemas).
"""
from carbon_ledger.database.schemas.activity_log import ActivityLogDBModel
from carbon_ledger.database.schemas.payout import PayoutDBModel

__all__ = [
    "ActivityLogDBModel",
    "PayoutDBModel",
]
