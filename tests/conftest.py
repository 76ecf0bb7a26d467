import os

# Must be set before caterhub.db builds its engine
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from caterhub.db import enable_sqlite_foreign_keys, get_db
from caterhub.main import app
from caterhub.models import Base, MenuCategory, MenuItem
from caterhub.schemas.order import OrderCreate, OrderItemIn

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker):
    """Async test client with the database dependency overridden."""
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def menu(db):
    """
    One category with:
    - ItemA: plate $10, full tray $90
    - ItemB: half tray $30
    - Roti: $1 per piece, 4 per plate, minimum 10 pieces
    """
    category = MenuCategory(name="Main Course", display_order=1)
    db.add(category)
    await db.flush()

    item_a = MenuItem(
        name="ItemA",
        category_id=category.id,
        price_per_plate=Decimal("10.00"),
        price_full_tray=Decimal("90.00"),
        ingredients=["paneer", "tomato"],
    )
    item_b = MenuItem(
        name="ItemB",
        category_id=category.id,
        price_half_tray=Decimal("30.00"),
        description="Slow cooked black lentils",
        ingredients=["lentils", "butter"],
    )
    roti = MenuItem(
        name="Roti",
        category_id=category.id,
        price_per_piece=Decimal("1.00"),
        pieces_per_plate=4,
        min_piece_order=10,
        ingredients=["wheat flour"],
    )
    db.add_all([item_a, item_b, roti])
    await db.commit()

    return {"category": category, "item_a": item_a, "item_b": item_b, "roti": roti}


@pytest.fixture
def order_payload(menu):
    """ItemA plate 2x10 and ItemB half tray 1x30: total 50."""
    return OrderCreate(
        customer_name="Asha Patel",
        customer_phone="201-555-0101",
        delivery_date=date(2024, 5, 15),
        delivery_time="18:30",
        items=[
            OrderItemIn(menu_item_id=menu["item_a"].id, size_type="plate", quantity=2),
            OrderItemIn(menu_item_id=menu["item_b"].id, size_type="half_tray", quantity=1),
        ],
    )
