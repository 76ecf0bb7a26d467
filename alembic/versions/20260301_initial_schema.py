"""initial schema: menu, customers, orders, reviews, todays menu

Revision ID: 20260301_initial
Revises:
Create Date: 2026-03-01 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20260301_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade():
    # 1) Menu
    op.create_table(
        "menu_categories",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("display_order", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_menu_categories_active", "menu_categories", ["is_active", "display_order"])

    op.create_table(
        "menu_items",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "category_id", sa.String(),
            sa.ForeignKey("menu_categories.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("price_per_plate", sa.Numeric(10, 2), nullable=True),
        sa.Column("price_half_tray", sa.Numeric(10, 2), nullable=True),
        sa.Column("price_full_tray", sa.Numeric(10, 2), nullable=True),
        sa.Column("price_per_piece", sa.Numeric(10, 2), nullable=True),
        sa.Column("pieces_per_plate", sa.Integer(), nullable=True),
        sa.Column("min_piece_order", sa.Integer(), nullable=True),
        sa.Column("ingredients", sa.JSON(), nullable=False),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("is_available", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("display_order", sa.Integer(), server_default="0", nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "price_per_plate IS NOT NULL OR price_half_tray IS NOT NULL "
            "OR price_full_tray IS NOT NULL OR price_per_piece IS NOT NULL",
            name="ck_menu_item_has_price",
        ),
    )
    op.create_index("idx_menu_items_category", "menu_items", ["category_id"])

    # 2) Customers and orders
    op.create_table(
        "customers",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("idx_customers_phone", "customers", ["phone"])

    op.create_table(
        "orders",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("order_seq", sa.Integer(), nullable=False, unique=True),
        sa.Column("order_number", sa.String(), nullable=False, unique=True),
        sa.Column(
            "customer_id", sa.String(),
            sa.ForeignKey("customers.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("customer_phone", sa.String(), nullable=False),
        sa.Column("delivery_date", sa.Date(), nullable=False),
        sa.Column("delivery_time", sa.String(), nullable=True),
        sa.Column("delivery_address", sa.Text(), nullable=True),
        sa.Column("special_instructions", sa.Text(), nullable=True),
        sa.Column("status", sa.String(), server_default="received", nullable=False),
        sa.Column("subtotal_amount", sa.Numeric(10, 2), server_default="0", nullable=False),
        sa.Column("discount_type", sa.String(), nullable=True),
        sa.Column("discount_value", sa.Numeric(10, 2), server_default="0", nullable=False),
        sa.Column("discount_amount", sa.Numeric(10, 2), server_default="0", nullable=False),
        sa.Column("tip_amount", sa.Numeric(10, 2), server_default="0", nullable=False),
        sa.Column("total_amount", sa.Numeric(10, 2), server_default="0", nullable=False),
        *_timestamps(),
    )
    op.create_index("idx_orders_delivery_date", "orders", ["delivery_date"])
    op.create_index("idx_orders_customer", "orders", ["customer_id"])
    op.create_index("idx_orders_status", "orders", ["status"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column(
            "order_id", sa.String(),
            sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "menu_item_id", sa.String(),
            sa.ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("item_name", sa.String(), nullable=False),
        sa.Column("size_type", sa.String(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("special_instructions", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("idx_order_items_order", "order_items", ["order_id"])

    # 3) Reviews
    op.create_table(
        "reviews",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("review_text", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(), server_default="pending", nullable=False),
        sa.Column("reviewed_by", sa.String(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_review_rating"),
    )
    op.create_index("idx_reviews_status", "reviews", ["status"])

    op.create_table(
        "review_menu_items",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column(
            "review_id", sa.String(),
            sa.ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "menu_item_id", sa.String(),
            sa.ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.UniqueConstraint("review_id", "menu_item_id", name="uq_review_menu_item"),
    )

    # 4) Today's menu
    op.create_table(
        "todays_menu",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column(
            "menu_item_id", sa.String(),
            sa.ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("is_available", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("special_note", sa.Text(), nullable=True),
        sa.Column("display_order", sa.Integer(), server_default="0", nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("menu_item_id", "date", name="uq_todays_menu_item_date"),
    )
    op.create_index("idx_todays_menu_date", "todays_menu", ["date"])
    op.create_index("idx_todays_menu_available", "todays_menu", ["date", "is_available"])


def downgrade():
    op.drop_index("idx_todays_menu_available", table_name="todays_menu")
    op.drop_index("idx_todays_menu_date", table_name="todays_menu")
    op.drop_table("todays_menu")
    op.drop_table("review_menu_items")
    op.drop_index("idx_reviews_status", table_name="reviews")
    op.drop_table("reviews")
    op.drop_index("idx_order_items_order", table_name="order_items")
    op.drop_table("order_items")
    op.drop_index("idx_orders_status", table_name="orders")
    op.drop_index("idx_orders_customer", table_name="orders")
    op.drop_index("idx_orders_delivery_date", table_name="orders")
    op.drop_table("orders")
    op.drop_index("idx_customers_phone", table_name="customers")
    op.drop_table("customers")
    op.drop_index("idx_menu_items_category", table_name="menu_items")
    op.drop_table("menu_items")
    op.drop_index("idx_menu_categories_active", table_name="menu_categories")
    op.drop_table("menu_categories")
