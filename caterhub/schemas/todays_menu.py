from pydantic import BaseModel
from typing import Optional
from datetime import date as date_type, datetime

from .menu import MenuItemRead, PublicMenuItem


class TodaysMenuCreate(BaseModel):
    menu_item_id: str
    date: date_type
    special_note: Optional[str] = None
    display_order: int = 0


class TodaysMenuUpdate(BaseModel):
    is_available: Optional[bool] = None
    special_note: Optional[str] = None
    display_order: Optional[int] = None


class TodaysMenuRead(BaseModel):
    id: str
    menu_item_id: str
    date: date_type
    is_available: bool
    special_note: Optional[str] = None
    display_order: int
    created_at: datetime
    menu_item: MenuItemRead

    class Config:
        from_attributes = True


class PublicTodaysMenuEntry(BaseModel):
    id: str
    date: date_type
    special_note: Optional[str] = None
    category_name: Optional[str] = None
    item: PublicMenuItem
