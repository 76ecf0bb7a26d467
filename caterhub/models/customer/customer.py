from sqlalchemy import Column, String, Text, Index
from sqlalchemy.orm import relationship
from caterhub.models.base import Base, TimestampMixin
import uuid

class Customer(TimestampMixin, Base):
    __tablename__ = "customers"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)  # lookup key, not unique
    email = Column(String, nullable=True)
    address = Column(Text, nullable=True)

    orders = relationship("Order", back_populates="customer", passive_deletes=True)

    __table_args__ = (
        Index("idx_customers_phone", "phone"),
    )
