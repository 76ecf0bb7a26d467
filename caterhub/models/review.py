from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Text, CheckConstraint, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from caterhub.models.base import Base, TimestampMixin
import uuid


class Review(TimestampMixin, Base):
    """Customer review, published only once approved by an admin"""
    __tablename__ = "reviews"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name = Column(String, nullable=False)
    review_text = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)
    status = Column(String, default="pending", nullable=False)  # pending, approved, rejected
    reviewed_by = Column(String, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)

    menu_item_links = relationship(
        "ReviewMenuItem",
        back_populates="review",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_review_rating"),
        Index("idx_reviews_status", "status"),
    )

    @property
    def menu_items(self):
        return [link.menu_item for link in self.menu_item_links if link.menu_item is not None]


class ReviewMenuItem(Base):
    __tablename__ = "review_menu_items"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    review_id = Column(String, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False)
    menu_item_id = Column(String, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False)

    review = relationship("Review", back_populates="menu_item_links")
    menu_item = relationship("MenuItem")

    __table_args__ = (
        UniqueConstraint("review_id", "menu_item_id", name="uq_review_menu_item"),
    )
