from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from caterhub.core.constants import PRICE_FIELDS
from caterhub.models.menu.menu_item import MenuItem
from caterhub.models.menu.menu_category import MenuCategory
from caterhub.schemas.menu import MenuItemCreate, MenuItemUpdate


def _item_query():
    return select(MenuItem).options(selectinload(MenuItem.category))


async def get_menu_items(db: AsyncSession, category_id: str = None, available_only: bool = False):
    """All menu items with their category, in display order"""
    query = _item_query()

    if category_id:
        query = query.where(MenuItem.category_id == category_id)
    if available_only:
        query = query.where(MenuItem.is_available == True)

    query = query.order_by(MenuItem.display_order.asc(), MenuItem.name.asc())
    result = await db.execute(query)
    return result.scalars().all()


async def get_menu_items_by_category(db: AsyncSession, category_id: str):
    """Available items of one category (public menu pages)"""
    return await get_menu_items(db, category_id=category_id, available_only=True)


async def get_menu_item(db: AsyncSession, item_id: str):
    result = await db.execute(
        _item_query()
        .where(MenuItem.id == item_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_menu_items_by_ids(db: AsyncSession, item_ids):
    if not item_ids:
        return {}
    result = await db.execute(_item_query().where(MenuItem.id.in_(list(item_ids))))
    return {item.id: item for item in result.scalars().all()}


async def _ensure_category(db: AsyncSession, category_id: str):
    res = await db.execute(select(MenuCategory.id).where(MenuCategory.id == category_id))
    if res.scalar_one_or_none() is None:
        raise ValueError("Invalid category")


async def create_menu_item(db: AsyncSession, item: MenuItemCreate):
    await _ensure_category(db, item.category_id)

    new_item = MenuItem(**item.model_dump())
    db.add(new_item)
    await db.commit()
    return await get_menu_item(db, new_item.id)


async def update_menu_item(db: AsyncSession, item_id: str, updates: MenuItemUpdate):
    item = await get_menu_item(db, item_id)
    if not item:
        return None

    update_data = updates.model_dump(exclude_unset=True)
    if update_data.get("category_id"):
        await _ensure_category(db, update_data["category_id"])

    prices = {field: update_data.get(field, getattr(item, field)) for field in PRICE_FIELDS}
    if all(value is None for value in prices.values()):
        raise ValueError("At least one price must be set")

    for key, value in update_data.items():
        setattr(item, key, value)

    await db.commit()
    return await get_menu_item(db, item_id)


async def set_menu_item_image(db: AsyncSession, item_id: str, image_url: str):
    item = await get_menu_item(db, item_id)
    if not item:
        return None
    item.image_url = image_url
    await db.commit()
    return await get_menu_item(db, item_id)


async def delete_menu_item(db: AsyncSession, item_id: str):
    item = await get_menu_item(db, item_id)
    if item:
        await db.delete(item)
        await db.commit()
    return item
