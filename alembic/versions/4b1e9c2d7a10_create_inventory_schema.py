"""create_inventory_schema

Revision ID: 4b1e9c2d7a10
Revises:
Create Date: 2026-10-19 10:12:44.581203
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e9c2d7a10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # INVENTORY ITEMS
    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sku", sa.Text(), nullable=False, unique=True),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("unit", sa.Text(), nullable=False, server_default="units"),
        sa.Column("category", sa.Text(), nullable=True),
        sa.Column("min_threshold", sa.Integer(), server_default="10"),
        sa.Column("max_threshold", sa.Integer(), server_default="100"),
        sa.Column("unit_price", sa.Float(), server_default="0"),
        sa.Column("supplier", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.CheckConstraint("quantity >= 0", name="ck_inventory_items_quantity_non_negative"),
    )

    # ALERTS
    op.create_table(
        "alerts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("alert_type", sa.Text(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("severity", sa.Text(), server_default="warning"),
        sa.Column("is_resolved", sa.Boolean(), server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("resolved_at", sa.DateTime(), nullable=True),
    )

    op.create_index(
        "uq_alerts_open_per_item",
        "alerts",
        ["item_id", "alert_type"],
        unique=True,
        sqlite_where=sa.text("NOT is_resolved"),
        postgresql_where=sa.text("NOT is_resolved"),
    )

    # ACTIVITY LOG
    op.create_table(
        "activity_log",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "item_id",
            sa.Integer(),
            sa.ForeignKey("inventory_items.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("action", sa.Text(), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("user", sa.Text(), server_default="system"),
        sa.Column("timestamp", sa.DateTime(), server_default=sa.func.now()),
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("activity_log")
    op.drop_index("uq_alerts_open_per_item", table_name="alerts")
    op.drop_table("alerts")
    op.drop_table("inventory_items")
