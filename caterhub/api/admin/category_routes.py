from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from caterhub.crud import menu_category as category_crud
from caterhub.db import get_db
from caterhub.schemas.menu import MenuCategoryCreate, MenuCategoryRead, MenuCategoryUpdate

router = APIRouter()


@router.get("/", response_model=List[MenuCategoryRead])
async def list_categories(include_inactive: bool = True, db: AsyncSession = Depends(get_db)):
    return await category_crud.get_categories(db, include_inactive=include_inactive)


@router.post("/", response_model=MenuCategoryRead, status_code=201)
async def create_category(category: MenuCategoryCreate, db: AsyncSession = Depends(get_db)):
    return await category_crud.create_category(db, category)


@router.get("/{category_id}", response_model=MenuCategoryRead)
async def get_category(category_id: str, db: AsyncSession = Depends(get_db)):
    category = await category_crud.get_category(db, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.put("/{category_id}", response_model=MenuCategoryRead)
async def update_category(category_id: str, updates: MenuCategoryUpdate, db: AsyncSession = Depends(get_db)):
    category = await category_crud.update_category(db, category_id, updates)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.delete("/{category_id}")
async def delete_category(category_id: str, db: AsyncSession = Depends(get_db)):
    """Deleting a category also deletes its menu items"""
    category = await category_crud.delete_category(db, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return {"message": "Category deleted"}
