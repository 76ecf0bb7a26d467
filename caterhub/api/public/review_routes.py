import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from caterhub.crud import review as review_crud
from caterhub.db import get_db
from caterhub.schemas.review import ReviewCreate, ReviewRead

log = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=List[ReviewRead])
async def list_approved_reviews(db: AsyncSession = Depends(get_db)):
    return await review_crud.get_approved_reviews(db)


@router.post("/", response_model=ReviewRead, status_code=201)
async def submit_review(review: ReviewCreate, db: AsyncSession = Depends(get_db)):
    """Reviews are held as pending until an admin approves them"""
    try:
        return await review_crud.create_review(db, review)
    except ValueError as e:
        log.warning("review rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
