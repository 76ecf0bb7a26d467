from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from caterhub.crud import menu_category as category_crud
from caterhub.crud import menu_item as item_crud
from caterhub.db import get_db
from caterhub.schemas.menu import MenuCategoryRead, PublicMenuCategory, PublicMenuItem
from caterhub.services.menu_catalog import build_public_menu, search_menu_items, to_public_item

router = APIRouter()


@router.get("/", response_model=List[PublicMenuCategory])
async def get_public_menu(db: AsyncSession = Depends(get_db)):
    """Full menu grouped by active category"""
    categories = await category_crud.get_categories(db)
    items = await item_crud.get_menu_items(db, available_only=True)
    return build_public_menu(categories, items)


@router.get("/categories", response_model=List[MenuCategoryRead])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await category_crud.get_categories(db)


@router.get("/categories/{category_id}/items", response_model=PublicMenuCategory)
async def get_category_items(category_id: str, db: AsyncSession = Depends(get_db)):
    category = await category_crud.get_category(db, category_id)
    if not category or not category.is_active:
        raise HTTPException(status_code=404, detail="Category not found")

    items = await item_crud.get_menu_items_by_category(db, category_id)
    return PublicMenuCategory(
        id=category.id,
        name=category.name,
        description=category.description,
        items=[to_public_item(item, category.name) for item in items],
    )


@router.get("/search", response_model=List[PublicMenuItem])
async def search_menu(q: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db)):
    """Search available items by name, description or ingredient"""
    items = await item_crud.get_menu_items(db, available_only=True)
    return [to_public_item(item) for item in search_menu_items(items, q)]
