"""transactions and catalog items

Revision ID: 0001_initial
Revises:
Create Date: 2025-08-23
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "catalog_items",
        sa.Column("seq", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("item_id", sa.String(length=64), nullable=False),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.UniqueConstraint("kind", "item_id", name="uq_catalog_items_kind_item_id"),
    )
    op.create_index("ix_catalog_items_kind", "catalog_items", ["kind"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("amount", sa.Numeric(24, 2), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("total_amount", sa.Numeric(24, 2), nullable=False),
        sa.Column("item_id", sa.String(length=64), nullable=False),
        sa.Column("counterparty", sa.String(length=256), nullable=False),
        sa.Column("contact", sa.String(length=32), nullable=True),
        sa.Column("receipt", sa.String(length=512), nullable=True),
        sa.Column("owner_id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_transactions_kind", "transactions", ["kind"])
    op.create_index("ix_transactions_item_id", "transactions", ["item_id"])
    op.create_index("ix_transactions_created_at", "transactions", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_transactions_created_at", table_name="transactions")
    op.drop_index("ix_transactions_item_id", table_name="transactions")
    op.drop_index("ix_transactions_kind", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_catalog_items_kind", table_name="catalog_items")
    op.drop_table("catalog_items")
