from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal

from caterhub.core.constants import OrderStatus, SizeType, DiscountType


# ---------- Order Items ----------
class OrderItemIn(BaseModel):
    menu_item_id: Optional[str] = None
    item_name: Optional[str] = None
    size_type: SizeType
    quantity: int = Field(..., ge=1)
    unit_price: Optional[Decimal] = Field(None, ge=0)
    special_instructions: Optional[str] = None


class OrderItemRead(BaseModel):
    id: str
    order_id: str
    menu_item_id: Optional[str] = None
    item_name: str
    size_type: SizeType
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    special_instructions: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


# ---------- Orders ----------
class OrderBase(BaseModel):
    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    delivery_date: date
    delivery_time: Optional[str] = None
    delivery_address: Optional[str] = None
    special_instructions: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Decimal = Field(Decimal("0"), ge=0)
    tip_amount: Decimal = Field(Decimal("0"), ge=0)


class OrderCreate(OrderBase):
    status: OrderStatus = OrderStatus.RECEIVED
    items: List[OrderItemIn] = Field(..., min_length=1)


class OrderUpdate(BaseModel):
    customer_name: Optional[str] = Field(None, min_length=1)
    customer_phone: Optional[str] = Field(None, min_length=1)
    delivery_date: Optional[date] = None
    delivery_time: Optional[str] = None
    delivery_address: Optional[str] = None
    special_instructions: Optional[str] = None
    status: Optional[OrderStatus] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[Decimal] = Field(None, ge=0)
    tip_amount: Optional[Decimal] = Field(None, ge=0)
    items: Optional[List[OrderItemIn]] = Field(None, min_length=1)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderRead(OrderBase):
    id: str
    order_number: str
    customer_id: Optional[str] = None
    status: OrderStatus
    subtotal_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = []

    class Config:
        from_attributes = True


class OrderItemChanges(BaseModel):
    deleted: List[str] = []
    updated: List[str] = []
    inserted: List[str] = []


class OrderUpdateResult(BaseModel):
    order: OrderRead
    changes: OrderItemChanges
