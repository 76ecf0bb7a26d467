from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from caterhub.core.config import settings
from caterhub.core.constants import OrderStatus
from caterhub.models.customer.customer_order import Order, OrderItem


def _order_query():
    return select(Order).options(selectinload(Order.items))


async def get_orders(
    db: AsyncSession,
    delivery_date: Optional[date] = None,
    customer_id: Optional[str] = None,
    status: Optional[str] = None,
):
    """Orders with their items, newest first"""
    query = _order_query()

    if delivery_date:
        query = query.where(Order.delivery_date == delivery_date)
    if customer_id:
        query = query.where(Order.customer_id == customer_id)
    if status:
        query = query.where(Order.status == status)

    result = await db.execute(query.order_by(Order.created_at.desc()))
    return result.scalars().all()


async def get_orders_between(db: AsyncSession, start: date, end: date):
    """Orders delivered in [start, end], used by reports"""
    result = await db.execute(
        _order_query()
        .where(Order.delivery_date >= start, Order.delivery_date <= end)
        .order_by(Order.delivery_date.asc(), Order.created_at.asc())
    )
    return result.scalars().all()


async def get_order(db: AsyncSession, order_id: str):
    result = await db.execute(
        _order_query()
        .where(Order.id == order_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def next_order_number(db: AsyncSession):
    """Returns (seq, order_number) for the next order, e.g. (12, "ORD-0012")."""
    result = await db.execute(select(func.max(Order.order_seq)))
    seq = (result.scalar() or 0) + 1
    return seq, f"{settings.order_number_prefix}-{seq:04d}"


async def get_items_to_prepare(db: AsyncSession, delivery_date: date):
    """Line items of orders still in 'received' status for one delivery date"""
    result = await db.execute(
        select(OrderItem)
        .join(Order, OrderItem.order_id == Order.id)
        .where(
            Order.delivery_date == delivery_date,
            Order.status == OrderStatus.RECEIVED.value,
        )
    )
    return result.scalars().all()
