"""create_billing_tables

Revision ID: 5b1e0c9a7d21
Revises:
Create Date: 2026-10-17 10:12:44.519204
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1e0c9a7d21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # VENDORS
    op.create_table(
        "vendors",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("company_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_vendors_id", "vendors", ["id"])
    op.create_index("ix_vendors_email", "vendors", ["email"], unique=True)

    # SHOPS
    op.create_table(
        "shops",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("vendor_id", sa.Integer(), sa.ForeignKey("vendors.id"), nullable=False),
    )
    op.create_index("ix_shops_id", "shops", ["id"])
    op.create_index("ix_shops_vendor_id", "shops", ["vendor_id"])

    # CASHIERS
    op.create_table(
        "cashiers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("shop_id", sa.Integer(), sa.ForeignKey("shops.id"), nullable=False),
    )
    op.create_index("ix_cashiers_id", "cashiers", ["id"])
    op.create_index("ix_cashiers_email", "cashiers", ["email"], unique=True)
    op.create_index("ix_cashiers_shop_id", "cashiers", ["shop_id"])

    # PRODUCTS
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("low_stock_threshold", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("shop_id", sa.Integer(), sa.ForeignKey("shops.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        sa.CheckConstraint("quantity >= 0", name="ck_product_quantity_non_negative"),
        sa.CheckConstraint("low_stock_threshold >= 0", name="ck_product_low_stock_non_negative"),
    )
    op.create_index("ix_products_id", "products", ["id"])
    op.create_index("ix_products_shop", "products", ["shop_id"])

    # BILLS
    op.create_table(
        "bills",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("shop_id", sa.Integer(), sa.ForeignKey("shops.id"), nullable=False),
        sa.Column("cashier_id", sa.Integer(), sa.ForeignKey("cashiers.id"), nullable=False),
        sa.Column("total", sa.Numeric(12, 2), nullable=False),
        sa.Column("customer_name", sa.String(), nullable=True),
        sa.Column("customer_phone", sa.String(), nullable=True),
        sa.Column("payment_method", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("total >= 0", name="ck_bill_total_non_negative"),
        sa.CheckConstraint("payment_method IN ('cash', 'upi')", name="ck_bill_payment_method_valid"),
    )
    op.create_index("ix_bills_id", "bills", ["id"])
    op.create_index("ix_bills_shop_id", "bills", ["shop_id"])
    op.create_index("ix_bills_cashier_id", "bills", ["cashier_id"])
    op.create_index("ix_bills_created_at", "bills", ["created_at"])
    op.create_index("ix_bills_shop_created", "bills", ["shop_id", "created_at"])

    # BILL ITEMS
    op.create_table(
        "bill_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("bill_id", sa.Integer(), sa.ForeignKey("bills.id"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="SET NULL"), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("product_name", sa.String(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("line_total", sa.Numeric(12, 2), nullable=False),
        sa.CheckConstraint("quantity > 0", name="ck_bill_item_quantity_positive"),
    )
    op.create_index("ix_bill_items_id", "bill_items", ["id"])
    op.create_index("ix_bill_items_bill_id", "bill_items", ["bill_id"])
    op.create_index("ix_bill_items_product_id", "bill_items", ["product_id"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("bill_items")
    op.drop_table("bills")
    op.drop_table("products")
    op.drop_table("cashiers")
    op.drop_table("shops")
    op.drop_table("vendors")
