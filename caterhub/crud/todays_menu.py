from datetime import date
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from caterhub.models.menu.menu_item import MenuItem
from caterhub.models.menu.menu_category import MenuCategory
from caterhub.models.todays_menu import TodaysMenu
from caterhub.schemas.todays_menu import TodaysMenuCreate, TodaysMenuUpdate


def _entry_query():
    return select(TodaysMenu).options(
        selectinload(TodaysMenu.menu_item).selectinload(MenuItem.category)
    )


async def get_todays_menu(db: AsyncSession, menu_date: date, include_unavailable: bool = False):
    """
    Entries for a date in display order.
    The public view hides entries switched off for the day and menu items
    that are unavailable altogether.
    """
    query = _entry_query().where(TodaysMenu.date == menu_date)

    if not include_unavailable:
        query = (
            query.join(MenuItem, TodaysMenu.menu_item_id == MenuItem.id)
            .where(TodaysMenu.is_available == True, MenuItem.is_available == True)
        )

    query = query.order_by(TodaysMenu.display_order.asc(), TodaysMenu.created_at.asc())
    result = await db.execute(query)
    return result.scalars().all()


async def get_entry(db: AsyncSession, entry_id: str):
    result = await db.execute(
        _entry_query()
        .where(TodaysMenu.id == entry_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def add_to_todays_menu(db: AsyncSession, entry: TodaysMenuCreate):
    res = await db.execute(select(MenuItem.id).where(MenuItem.id == entry.menu_item_id))
    if res.scalar_one_or_none() is None:
        raise ValueError("Menu item not found")

    res = await db.execute(
        select(TodaysMenu.id).where(
            TodaysMenu.menu_item_id == entry.menu_item_id,
            TodaysMenu.date == entry.date,
        )
    )
    if res.scalar_one_or_none() is not None:
        raise ValueError("Item is already on the menu for this date")

    new_entry = TodaysMenu(**entry.model_dump())
    db.add(new_entry)
    await db.commit()
    return await get_entry(db, new_entry.id)


async def update_entry(db: AsyncSession, entry_id: str, updates: TodaysMenuUpdate):
    entry = await get_entry(db, entry_id)
    if not entry:
        return None

    for key, value in updates.model_dump(exclude_unset=True).items():
        setattr(entry, key, value)

    await db.commit()
    return await get_entry(db, entry_id)


async def toggle_availability(db: AsyncSession, entry_id: str):
    entry = await get_entry(db, entry_id)
    if not entry:
        return None
    return await update_entry(db, entry_id, TodaysMenuUpdate(is_available=not entry.is_available))


async def remove_entry(db: AsyncSession, entry_id: str):
    entry = await get_entry(db, entry_id)
    if entry:
        await db.delete(entry)
        await db.commit()
    return entry


async def clear_todays_menu(db: AsyncSession, menu_date: date) -> int:
    result = await db.execute(delete(TodaysMenu).where(TodaysMenu.date == menu_date))
    await db.commit()
    return result.rowcount or 0


async def get_items_available_to_add(
    db: AsyncSession,
    menu_date: date,
    category_name: Optional[str] = None,
    search: Optional[str] = None,
):
    """Available menu items not yet on the menu for menu_date"""
    already = select(TodaysMenu.menu_item_id).where(TodaysMenu.date == menu_date)

    query = (
        select(MenuItem)
        .options(selectinload(MenuItem.category))
        .join(MenuCategory, MenuItem.category_id == MenuCategory.id)
        .where(MenuItem.is_available == True, MenuItem.id.not_in(already))
    )
    if category_name:
        query = query.where(MenuCategory.name == category_name)
    if search:
        query = query.where(MenuItem.name.ilike(f"%{search.strip()}%"))

    query = query.order_by(MenuCategory.display_order.asc(), MenuItem.name.asc())
    result = await db.execute(query)
    return result.scalars().all()
