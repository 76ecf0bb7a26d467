from sqlalchemy import Column, String, Integer, Boolean, Text, Index
from sqlalchemy.orm import relationship
from caterhub.models.base import Base, TimestampMixin
import uuid

class MenuCategory(TimestampMixin, Base):
    __tablename__ = "menu_categories"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    display_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    items = relationship("MenuItem", back_populates="category", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_menu_categories_active", "is_active", "display_order"),
    )
