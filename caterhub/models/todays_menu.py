from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Date, Text, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from caterhub.models.base import Base, TimestampMixin
import uuid


class TodaysMenu(TimestampMixin, Base):
    """A menu item offered for same-day pickup on a given date"""
    __tablename__ = "todays_menu"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    menu_item_id = Column(String, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    special_note = Column(Text, nullable=True)
    display_order = Column(Integer, default=0, nullable=False)

    menu_item = relationship("MenuItem", back_populates="todays_menu_entries")

    __table_args__ = (
        UniqueConstraint("menu_item_id", "date", name="uq_todays_menu_item_date"),
        Index("idx_todays_menu_date", "date"),
        Index("idx_todays_menu_available", "date", "is_available"),
    )
