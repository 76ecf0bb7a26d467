from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from caterhub.models.menu.menu_category import MenuCategory
from caterhub.schemas.menu import MenuCategoryCreate, MenuCategoryUpdate


async def get_categories(db: AsyncSession, include_inactive: bool = False):
    """Active categories in display order"""
    query = select(MenuCategory)
    if not include_inactive:
        query = query.where(MenuCategory.is_active == True)
    query = query.order_by(MenuCategory.display_order.asc(), MenuCategory.name.asc())

    result = await db.execute(query)
    return result.scalars().all()


async def get_category(db: AsyncSession, category_id: str):
    result = await db.execute(select(MenuCategory).where(MenuCategory.id == category_id))
    return result.scalar_one_or_none()


async def create_category(db: AsyncSession, category: MenuCategoryCreate):
    new_category = MenuCategory(**category.model_dump())
    db.add(new_category)
    await db.commit()
    await db.refresh(new_category)
    return new_category


async def update_category(db: AsyncSession, category_id: str, updates: MenuCategoryUpdate):
    category = await get_category(db, category_id)
    if not category:
        return None

    for key, value in updates.model_dump(exclude_unset=True).items():
        setattr(category, key, value)

    await db.commit()
    await db.refresh(category)
    return category


async def delete_category(db: AsyncSession, category_id: str):
    category = await get_category(db, category_id)
    if category:
        await db.delete(category)
        await db.commit()
    return category
