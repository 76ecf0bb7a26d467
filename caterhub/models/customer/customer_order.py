from sqlalchemy import Column, String, Integer, ForeignKey, Date, DateTime, Text, Numeric, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from caterhub.models.base import Base, TimestampMixin
import uuid


class Order(TimestampMixin, Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    order_seq = Column(Integer, nullable=False, unique=True)
    order_number = Column(String, nullable=False, unique=True)  # ORD-0001, ORD-0002, ...

    customer_id = Column(String, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True)
    customer = relationship("Customer", back_populates="orders")

    # Snapshot at time of order
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)

    delivery_date = Column(Date, nullable=False)
    delivery_time = Column(String, nullable=True)  # "18:30"
    delivery_address = Column(Text, nullable=True)
    special_instructions = Column(Text, nullable=True)

    status = Column(String, default="received", nullable=False)  # received, delivered, paid

    # Pricing
    subtotal_amount = Column(Numeric(10, 2), nullable=False, default=0)
    discount_type = Column(String, nullable=True)  # percentage, fixed
    discount_value = Column(Numeric(10, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(10, 2), nullable=False, default=0)
    tip_amount = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.created_at",
    )

    __table_args__ = (
        Index("idx_orders_delivery_date", "delivery_date"),
        Index("idx_orders_customer", "customer_id"),
        Index("idx_orders_status", "status"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    menu_item_id = Column(String, ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True)

    # Snapshot name at time of order
    item_name = Column(String, nullable=False)
    size_type = Column(String, nullable=False)  # plate, half_tray, full_tray, piece
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    special_instructions = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    order = relationship("Order", back_populates="items")
    menu_item = relationship("MenuItem", back_populates="order_items")

    __table_args__ = (
        Index("idx_order_items_order", "order_id"),
    )
