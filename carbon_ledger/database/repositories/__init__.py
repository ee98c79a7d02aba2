"""
Database repositories for data access layer.

Provides clean abstraction over database operations following repository pattern.
"""
from carbon_ledger.database.repositories.activity_log import ActivityLogRepository
from carbon_ledger.database.repositories.base import BaseRepository
from carbon_ledger.database.repositories.payout import PayoutRepository

__all__ = [
    "ActivityLogRepository",
    "BaseRepository",
    "PayoutRepository",
]
