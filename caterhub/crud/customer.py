from sqlalchemy import func, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from caterhub.models.customer.customer import Customer
from caterhub.models.customer.customer_order import Order
from caterhub.schemas.customer import CustomerCreate, CustomerUpdate


async def get_customers(db: AsyncSession):
    result = await db.execute(select(Customer).order_by(Customer.name.asc()))
    return result.scalars().all()


async def get_customer(db: AsyncSession, customer_id: str):
    result = await db.execute(select(Customer).where(Customer.id == customer_id))
    return result.scalar_one_or_none()


async def find_customer_by_phone(db: AsyncSession, phone: str):
    """Oldest customer with this phone number. Phone is a lookup key, not unique."""
    result = await db.execute(
        select(Customer)
        .where(Customer.phone == phone.strip())
        .order_by(Customer.created_at.asc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_customers_with_totals(db: AsyncSession):
    """
    Every customer with the sum and count of their orders.
    Returns (Customer, total_order_value, order_count) rows.
    """
    result = await db.execute(
        select(
            Customer,
            func.coalesce(func.sum(Order.total_amount), 0).label("total_order_value"),
            func.count(Order.id).label("order_count"),
        )
        .outerjoin(Order, and_(Order.customer_id == Customer.id))
        .group_by(Customer.id)
        .order_by(Customer.name.asc())
    )
    return result.all()


async def get_customer_orders(db: AsyncSession, customer_id: str):
    result = await db.execute(
        select(Order)
        .options(selectinload(Order.items))
        .where(Order.customer_id == customer_id)
        .order_by(Order.created_at.desc())
    )
    return result.scalars().all()


async def create_customer(db: AsyncSession, customer: CustomerCreate):
    new_customer = Customer(**customer.model_dump())
    db.add(new_customer)
    await db.commit()
    await db.refresh(new_customer)
    return new_customer


async def update_customer(db: AsyncSession, customer_id: str, updates: CustomerUpdate):
    customer = await get_customer(db, customer_id)
    if not customer:
        return None

    for key, value in updates.model_dump(exclude_unset=True).items():
        setattr(customer, key, value)

    await db.commit()
    await db.refresh(customer)
    return customer


async def delete_customer(db: AsyncSession, customer_id: str):
    """Orders keep their name/phone snapshot; customer_id is nulled by the FK."""
    customer = await get_customer(db, customer_id)
    if customer:
        await db.delete(customer)
        await db.commit()
    return customer
