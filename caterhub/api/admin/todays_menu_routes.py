import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from caterhub.crud import todays_menu as todays_menu_crud
from caterhub.db import get_db
from caterhub.schemas.menu import MenuItemRead
from caterhub.schemas.todays_menu import TodaysMenuCreate, TodaysMenuRead, TodaysMenuUpdate
from caterhub.utils.date_ranges import business_today

log = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=List[TodaysMenuRead])
async def list_entries(menu_date: Optional[date] = None, db: AsyncSession = Depends(get_db)):
    """All entries for a date, including ones switched off"""
    return await todays_menu_crud.get_todays_menu(db, menu_date or business_today(), include_unavailable=True)


@router.get("/available-items", response_model=List[MenuItemRead])
async def items_available_to_add(
    menu_date: Optional[date] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    return await todays_menu_crud.get_items_available_to_add(
        db, menu_date or business_today(), category_name=category, search=search
    )


@router.post("/", response_model=TodaysMenuRead, status_code=201)
async def add_entry(entry: TodaysMenuCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await todays_menu_crud.add_to_todays_menu(db, entry)
    except ValueError as e:
        log.warning("today's menu add rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{entry_id}", response_model=TodaysMenuRead)
async def update_entry(entry_id: str, updates: TodaysMenuUpdate, db: AsyncSession = Depends(get_db)):
    entry = await todays_menu_crud.update_entry(db, entry_id, updates)
    if not entry:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@router.post("/{entry_id}/toggle", response_model=TodaysMenuRead)
async def toggle_entry(entry_id: str, db: AsyncSession = Depends(get_db)):
    entry = await todays_menu_crud.toggle_availability(db, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Entry not found")
    return entry


@router.delete("/{entry_id}")
async def remove_entry(entry_id: str, db: AsyncSession = Depends(get_db)):
    entry = await todays_menu_crud.remove_entry(db, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Entry not found")
    return {"message": "Removed from today's menu"}


@router.delete("/")
async def clear_menu(menu_date: Optional[date] = None, db: AsyncSession = Depends(get_db)):
    menu_date = menu_date or business_today()
    removed = await todays_menu_crud.clear_todays_menu(db, menu_date)
    log.info("cleared %s entries from today's menu for %s", removed, menu_date)
    return {"message": f"Cleared {removed} items", "removed": removed}
