"""
Activity log SQLAlchemy model.
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, Date, DateTime, Index, Numeric, String, Text, Uuid

from carbon_ledger.database import Base


class ActivityLogDBModel(Base):
    """
    A single dated farm-management action reported by a farmer.

    Rows are append-only: they are created and deleted, never updated.
    """

    __tablename__ = "activity_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    owner_id = Column(
        String(100),
        nullable=False,
        index=True,
        comment="Identity of the farmer who owns the log",
    )

    type = Column(
        String(100),
        nullable=False,
        comment="Activity type (plowing, tree_planting, ...)",
    )

    date = Column(
        Date,
        nullable=False,
        comment="Date when the activity occurred",
    )

    quantity = Column(
        Numeric(12, 4),
        nullable=True,
        comment="Quantity in activity units; null counts as 1",
    )

    unit = Column(String(50), nullable=True, comment="Free-text unit")

    notes = Column(Text, nullable=False, default="", comment="Free-text notes")

    raw_data = Column(
        JSON,
        nullable=True,
        default=dict,
        comment="Original CSV row data for audit trail",
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_activity_logs_owner_date", "owner_id", "date"),
        {"comment": "Farm activity logs used for ledger and risk scoring"},
    )

    def __repr__(self):
        return f"<ActivityLogDBModel: {self.type} x{self.quantity} on {self.date}>"
