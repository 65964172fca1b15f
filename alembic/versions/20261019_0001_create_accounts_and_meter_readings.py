"""create customer_accounts and meter_readings tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "customer_accounts",
        sa.Column("account_id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("account_id"),
    )
    op.create_table(
        "meter_readings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account_id", sa.Integer(), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=False), nullable=False),
        sa.Column("read_value", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["account_id"],
            ["customer_accounts.account_id"],
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "account_id",
            "read_at",
            "read_value",
            name="uq_meter_readings_dedupe",
        ),
    )
    op.create_index(
        "ix_meter_readings_account_id_read_at",
        "meter_readings",
        ["account_id", "read_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_meter_readings_account_id_read_at", table_name="meter_readings")
    op.drop_table("meter_readings")
    op.drop_table("customer_accounts")
