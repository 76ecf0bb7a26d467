from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from enum import Enum

from .order import OrderRead


class CustomerSortField(str, Enum):
    name = "name"
    total_order_value = "total_order_value"
    order_count = "order_count"
    created_at = "created_at"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None
    address: Optional[str] = None


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    address: Optional[str] = None


class CustomerRead(CustomerBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CustomerWithTotals(CustomerRead):
    total_order_value: Decimal = Decimal("0")
    order_count: int = 0


class CustomerOrderHistory(BaseModel):
    customer: CustomerRead
    orders: List[OrderRead] = []
    total_orders: int
    total_spent: Decimal
    average_order_value: Decimal
