"""
Seed the sample menu: categories and their items.

It is SAFE to run multiple times (idempotent): categories are matched by
name, items by (category, name).

Usage:
    python scripts/seed_menu.py
"""

import asyncio
import sys
import os
from decimal import Decimal

# -------------------------------------------------------------------
# WINDOWS EVENT LOOP FIX (CRITICAL)
# -------------------------------------------------------------------
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sqlalchemy.future import select
from caterhub.db import async_session, create_db_and_tables
from caterhub.models.menu.menu_category import MenuCategory
from caterhub.models.menu.menu_item import MenuItem

# -------------------------------------------------------------------
# CATEGORY SEED DATA
# (name, description, display_order)
# -------------------------------------------------------------------
CATEGORIES = [
    ("Starters", "Crispy bites and chaat to start the meal", 1),
    ("Main Course", "Curries and dals, cooked fresh", 2),
    ("Rice", "Biryani and pulao", 3),
    ("Breads", "Fresh off the tawa, sold by the piece", 4),
    ("Dessert", "Something sweet to finish", 5),
]

# -------------------------------------------------------------------
# MENU ITEM SEED DATA
# category -> [(name, plate, half_tray, full_tray, ingredients)]
# -------------------------------------------------------------------
ITEMS = {
    "Starters": [
        ("Samosa Chaat", "8.00", "45.00", "85.00", ["samosa", "chickpeas", "yogurt", "tamarind chutney"]),
        ("Paneer Tikka", "12.00", "60.00", "110.00", ["paneer", "bell pepper", "onion", "yogurt"]),
    ],
    "Main Course": [
        ("Butter Chicken", "14.00", "70.00", "130.00", ["chicken", "tomato", "butter", "cream"]),
        ("Dal Makhani", "10.00", "50.00", "95.00", ["black lentils", "kidney beans", "butter", "cream"]),
        ("Palak Paneer", "12.00", "60.00", "115.00", ["spinach", "paneer", "garlic"]),
    ],
    "Rice": [
        ("Chicken Biryani", "13.00", "65.00", "120.00", ["basmati rice", "chicken", "saffron", "fried onion"]),
        ("Jeera Rice", "6.00", "30.00", "55.00", ["basmati rice", "cumin", "ghee"]),
    ],
    "Dessert": [
        ("Gulab Jamun", "6.00", "35.00", "65.00", ["milk solids", "sugar syrup", "cardamom"]),
    ],
}

# Breads: (name, price_per_piece, pieces_per_plate, min_piece_order, price_per_plate, ingredients)
BREADS = [
    ("Roti", "1.00", 4, 10, "4.00", ["whole wheat flour"]),
    ("Butter Naan", "2.50", 3, 6, "7.00", ["flour", "yogurt", "butter"]),
]


async def _get_or_create_category(db, name, description, display_order):
    res = await db.execute(select(MenuCategory).where(MenuCategory.name == name))
    category = res.scalar_one_or_none()
    if category:
        return category, False

    category = MenuCategory(name=name, description=description, display_order=display_order)
    db.add(category)
    await db.flush()
    return category, True


async def _item_exists(db, category_id, name) -> bool:
    res = await db.execute(
        select(MenuItem.id).where(MenuItem.category_id == category_id, MenuItem.name == name)
    )
    return res.scalar_one_or_none() is not None


async def seed():
    await create_db_and_tables()

    async with async_session() as db:
        created_categories = 0
        created_items = 0
        categories = {}

        for name, description, order in CATEGORIES:
            category, created = await _get_or_create_category(db, name, description, order)
            categories[name] = category
            created_categories += int(created)

        for category_name, items in ITEMS.items():
            category = categories[category_name]
            for position, (name, plate, half, full, ingredients) in enumerate(items):
                if await _item_exists(db, category.id, name):
                    continue
                db.add(MenuItem(
                    name=name,
                    category_id=category.id,
                    price_per_plate=Decimal(plate),
                    price_half_tray=Decimal(half),
                    price_full_tray=Decimal(full),
                    ingredients=ingredients,
                    display_order=position,
                ))
                created_items += 1

        breads = categories["Breads"]
        for position, (name, per_piece, per_plate_pieces, min_order, plate, ingredients) in enumerate(BREADS):
            if await _item_exists(db, breads.id, name):
                continue
            db.add(MenuItem(
                name=name,
                category_id=breads.id,
                price_per_piece=Decimal(per_piece),
                pieces_per_plate=per_plate_pieces,
                min_piece_order=min_order,
                price_per_plate=Decimal(plate),
                ingredients=ingredients,
                display_order=position,
            ))
            created_items += 1

        await db.commit()

    print(f"✅ Seeded {created_categories} categories and {created_items} menu items.")


if __name__ == "__main__":
    asyncio.run(seed())
