from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from caterhub.core.constants import ReviewStatus
from caterhub.crud import review as review_crud
from caterhub.db import get_db
from caterhub.schemas.review import ReviewRead, ReviewStatusUpdate

router = APIRouter()


@router.get("/", response_model=List[ReviewRead])
async def list_reviews(status: Optional[ReviewStatus] = None, db: AsyncSession = Depends(get_db)):
    return await review_crud.get_reviews(db, status=status.value if status else None)


@router.patch("/{review_id}/status", response_model=ReviewRead)
async def moderate_review(review_id: str, body: ReviewStatusUpdate, db: AsyncSession = Depends(get_db)):
    review = await review_crud.update_review_status(db, review_id, body.status, body.reviewed_by)
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return review


@router.delete("/{review_id}")
async def delete_review(review_id: str, db: AsyncSession = Depends(get_db)):
    review = await review_crud.delete_review(db, review_id)
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return {"message": "Review deleted"}
