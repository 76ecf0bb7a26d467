from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from caterhub.core.constants import PRICE_FIELDS


# ---------- Menu Category ----------
class MenuCategoryBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class MenuCategoryCreate(MenuCategoryBase):
    pass


class MenuCategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class MenuCategoryRead(MenuCategoryBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- Menu Item ----------
class MenuItemBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    category_id: str
    price_per_plate: Optional[Decimal] = Field(None, ge=0)
    price_half_tray: Optional[Decimal] = Field(None, ge=0)
    price_full_tray: Optional[Decimal] = Field(None, ge=0)
    price_per_piece: Optional[Decimal] = Field(None, ge=0)
    pieces_per_plate: Optional[int] = Field(None, ge=1)
    min_piece_order: Optional[int] = Field(None, ge=1)
    ingredients: List[str] = []
    image_url: Optional[str] = None
    is_available: bool = True
    display_order: int = 0


class MenuItemCreate(MenuItemBase):
    @model_validator(mode="after")
    def require_a_price(self):
        if all(getattr(self, field) is None for field in PRICE_FIELDS):
            raise ValueError("At least one price must be set")
        return self


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category_id: Optional[str] = None
    price_per_plate: Optional[Decimal] = Field(None, ge=0)
    price_half_tray: Optional[Decimal] = Field(None, ge=0)
    price_full_tray: Optional[Decimal] = Field(None, ge=0)
    price_per_piece: Optional[Decimal] = Field(None, ge=0)
    pieces_per_plate: Optional[int] = Field(None, ge=1)
    min_piece_order: Optional[int] = Field(None, ge=1)
    ingredients: Optional[List[str]] = None
    image_url: Optional[str] = None
    is_available: Optional[bool] = None
    display_order: Optional[int] = None


class MenuItemRead(MenuItemBase):
    id: str
    category_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- Public menu ----------
class PublicMenuItem(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    ingredients: List[str] = []
    price_label: str
    price_note: str
    order_link: str


class PublicMenuCategory(BaseModel):
    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    items: List[PublicMenuItem] = []
