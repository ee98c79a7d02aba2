"""create_activity_logs_table

Revision ID: 4f1c2a7b9d10
Revises:
Create Date: 2024-03-01 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "4f1c2a7b9d10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "activity_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "owner_id",
            sa.String(length=100),
            nullable=False,
            comment="Identity of the farmer who owns the log",
        ),
        sa.Column(
            "type",
            sa.String(length=100),
            nullable=False,
            comment="Activity type (plowing, tree_planting, ...)",
        ),
        sa.Column(
            "date",
            sa.Date(),
            nullable=False,
            comment="Date when the activity occurred",
        ),
        sa.Column(
            "quantity",
            sa.Numeric(precision=12, scale=4),
            nullable=True,
            comment="Quantity in activity units; null counts as 1",
        ),
        sa.Column("unit", sa.String(length=50), nullable=True, comment="Free-text unit"),
        sa.Column("notes", sa.Text(), nullable=False, comment="Free-text notes"),
        sa.Column(
            "raw_data",
            sa.JSON(),
            nullable=True,
            comment="Original CSV row data for audit trail",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        comment="Farm activity logs used for ledger and risk scoring",
    )
    op.create_index(
        "ix_activity_logs_owner_id", "activity_logs", ["owner_id"], unique=False
    )
    op.create_index(
        "ix_activity_logs_owner_date",
        "activity_logs",
        ["owner_id", "date"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_activity_logs_owner_date", table_name="activity_logs")
    op.drop_index("ix_activity_logs_owner_id", table_name="activity_logs")
    op.drop_table("activity_logs")
