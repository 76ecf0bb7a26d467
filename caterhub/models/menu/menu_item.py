from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Text, Numeric, JSON, CheckConstraint, Index
from sqlalchemy.orm import relationship
from caterhub.models.base import Base, TimestampMixin
import uuid

class MenuItem(TimestampMixin, Base):
    __tablename__ = "menu_items"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    category_id = Column(String, ForeignKey("menu_categories.id", ondelete="CASCADE"), nullable=False)
    category = relationship("MenuCategory", back_populates="items")

    # Pricing: at least one of these must be set
    price_per_plate = Column(Numeric(10, 2), nullable=True)
    price_half_tray = Column(Numeric(10, 2), nullable=True)
    price_full_tray = Column(Numeric(10, 2), nullable=True)
    price_per_piece = Column(Numeric(10, 2), nullable=True)
    pieces_per_plate = Column(Integer, nullable=True)
    min_piece_order = Column(Integer, nullable=True)

    ingredients = Column(JSON, nullable=False, default=list)  # ["paneer", "tomato", ...]
    image_url = Column(String, nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)

    order_items = relationship("OrderItem", back_populates="menu_item", passive_deletes=True)
    todays_menu_entries = relationship("TodaysMenu", back_populates="menu_item", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint(
            "price_per_plate IS NOT NULL OR price_half_tray IS NOT NULL "
            "OR price_full_tray IS NOT NULL OR price_per_piece IS NOT NULL",
            name="ck_menu_item_has_price",
        ),
        Index("idx_menu_items_category", "category_id"),
    )

    @property
    def category_name(self):
        return self.category.name if self.category else None
