"""create_payouts_table

Revision ID: 8a3e5d2c6b41
Revises: 4f1c2a7b9d10
Create Date: 2024-03-01 09:01:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "8a3e5d2c6b41"
down_revision = "4f1c2a7b9d10"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "payouts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "owner_id",
            sa.String(length=100),
            nullable=False,
            comment="Identity of the farmer requesting the payout",
        ),
        sa.Column(
            "amount",
            sa.Numeric(precision=15, scale=6),
            nullable=False,
            comment="Requested amount in tCO2e",
        ),
        sa.Column(
            "status",
            sa.String(length=50),
            nullable=False,
            comment="requested, pending_review or flagged_high_risk",
        ),
        sa.Column("flagged", sa.Boolean(), nullable=False),
        sa.Column(
            "risk_score",
            sa.Float(),
            nullable=True,
            comment="Risk score in [0, 1]; null when scoring was unavailable",
        ),
        sa.Column("anomalies", sa.JSON(), nullable=False),
        sa.Column("recommendations", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        comment="Payout requests with their risk assessment",
    )
    op.create_index("ix_payouts_owner_id", "payouts", ["owner_id"], unique=False)
    op.create_index(
        "ix_payouts_owner_created",
        "payouts",
        ["owner_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_payouts_owner_created", table_name="payouts")
    op.drop_index("ix_payouts_owner_id", table_name="payouts")
    op.drop_table("payouts")
