from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from caterhub.core.constants import ReviewStatus, MAX_REVIEW_MENU_ITEMS


class ReviewMenuItemRead(BaseModel):
    id: str
    name: str
    image_url: Optional[str] = None

    class Config:
        from_attributes = True


class ReviewCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    review_text: str = Field(..., min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    menu_item_ids: List[str] = Field(default_factory=list, max_length=MAX_REVIEW_MENU_ITEMS)


class ReviewStatusUpdate(BaseModel):
    status: ReviewStatus
    reviewed_by: Optional[str] = None


class ReviewRead(BaseModel):
    id: str
    full_name: str
    review_text: str
    rating: Optional[int] = None
    status: ReviewStatus
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime
    menu_items: List[ReviewMenuItemRead] = []

    class Config:
        from_attributes = True
