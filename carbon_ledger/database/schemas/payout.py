"""
Payout SQLAlchemy model.
"""
import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    Index,
    Numeric,
    String,
    Text,
    Uuid,
)

from carbon_ledger.database import Base


class PayoutDBModel(Base):
    """
    Payout request against a farmer's credit balance.

    Status is decided once by the payout workflow and never changed here.
    """

    __tablename__ = "payouts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    owner_id = Column(
        String(100),
        nullable=False,
        index=True,
        comment="Identity of the farmer requesting the payout",
    )

    amount = Column(
        Numeric(15, 6),
        nullable=False,
        comment="Requested amount in tCO2e",
    )

    status = Column(
        String(50),
        nullable=False,
        comment="requested, pending_review or flagged_high_risk",
    )

    flagged = Column(Boolean, nullable=False, default=False)

    risk_score = Column(
        Float,
        nullable=True,
        comment="Risk score in [0, 1]; null when scoring was unavailable",
    )

    anomalies = Column(JSON, nullable=False, default=list)

    recommendations = Column(JSON, nullable=False, default=list)

    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_payouts_owner_created", "owner_id", "created_at"),
        {"comment": "Payout requests with their risk assessment"},
    )

    def __repr__(self):
        return (
            f"<PayoutDBModel: {self.amount} tCO2e {self.status} "
            f"(risk={self.risk_score})>"
        )
