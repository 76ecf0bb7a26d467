from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from caterhub.crud import todays_menu as todays_menu_crud
from caterhub.db import get_db
from caterhub.schemas.todays_menu import PublicTodaysMenuEntry
from caterhub.services.menu_catalog import to_public_item
from caterhub.utils.date_ranges import business_today

router = APIRouter()


@router.get("/", response_model=List[PublicTodaysMenuEntry])
async def get_todays_menu(menu_date: Optional[date] = None, db: AsyncSession = Depends(get_db)):
    """Items available for pickup on a date (today by default)"""
    entries = await todays_menu_crud.get_todays_menu(db, menu_date or business_today())
    return [
        PublicTodaysMenuEntry(
            id=entry.id,
            date=entry.date,
            special_note=entry.special_note,
            category_name=entry.menu_item.category_name,
            item=to_public_item(entry.menu_item),
        )
        for entry in entries
    ]
