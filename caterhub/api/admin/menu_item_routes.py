import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from caterhub.crud import menu_item as item_crud
from caterhub.db import get_db
from caterhub.schemas.menu import MenuItemCreate, MenuItemRead, MenuItemUpdate
from caterhub.utils.spaces import upload_menu_item_photo

log = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=List[MenuItemRead])
async def list_menu_items(
    category_id: Optional[str] = None,
    available_only: bool = False,
    db: AsyncSession = Depends(get_db),
):
    return await item_crud.get_menu_items(db, category_id=category_id, available_only=available_only)


@router.post("/", response_model=MenuItemRead, status_code=201)
async def create_menu_item(item: MenuItemCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await item_crud.create_menu_item(db, item)
    except ValueError as e:
        log.warning("menu item create rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{item_id}", response_model=MenuItemRead)
async def get_menu_item(item_id: str, db: AsyncSession = Depends(get_db)):
    item = await item_crud.get_menu_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


@router.put("/{item_id}", response_model=MenuItemRead)
async def update_menu_item(item_id: str, updates: MenuItemUpdate, db: AsyncSession = Depends(get_db)):
    try:
        item = await item_crud.update_menu_item(db, item_id, updates)
    except ValueError as e:
        log.warning("menu item %s update rejected: %s", item_id, e)
        raise HTTPException(status_code=400, detail=str(e))
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


@router.delete("/{item_id}")
async def delete_menu_item(item_id: str, db: AsyncSession = Depends(get_db)):
    """Past orders keep the item name snapshot"""
    item = await item_crud.delete_menu_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return {"message": "Menu item deleted"}


@router.post("/{item_id}/image", response_model=MenuItemRead)
async def upload_menu_item_image(
    item_id: str,
    photo: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
):
    item = await item_crud.get_menu_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")

    body = await photo.read()
    try:
        image_url = await upload_menu_item_photo(item_id, photo.filename, photo.content_type, body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        log.error("menu item %s image upload failed: %s", item_id, e)
        raise HTTPException(status_code=503, detail="Image storage is not available")

    return await item_crud.set_menu_item_image(db, item_id, image_url)
