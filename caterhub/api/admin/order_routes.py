import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from caterhub.core.constants import OrderStatus
from caterhub.core.exceptions import OrderWriteError
from caterhub.crud import order as order_crud
from caterhub.db import get_db
from caterhub.schemas.order import (
    OrderCreate,
    OrderRead,
    OrderStatusUpdate,
    OrderUpdate,
    OrderUpdateResult,
)
from caterhub.schemas.reports import PreparationItem
from caterhub.services.exports import render_receipt
from caterhub.services.order_writer import OrderWriter
from caterhub.services.reporting import build_preparation_summary
from caterhub.utils.date_ranges import business_today

log = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=List[OrderRead])
async def list_orders(
    delivery_date: Optional[date] = None,
    customer_id: Optional[str] = None,
    status: Optional[OrderStatus] = None,
    db: AsyncSession = Depends(get_db),
):
    return await order_crud.get_orders(
        db,
        delivery_date=delivery_date,
        customer_id=customer_id,
        status=status.value if status else None,
    )


@router.post("/", response_model=OrderRead, status_code=201)
async def create_order(order: OrderCreate, db: AsyncSession = Depends(get_db)):
    try:
        return await OrderWriter(db).create(order)
    except ValueError as e:
        log.warning("order create rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except OrderWriteError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/preparation", response_model=List[PreparationItem])
async def preparation_summary(delivery_date: Optional[date] = None, db: AsyncSession = Depends(get_db)):
    """What the kitchen still has to cook for a delivery date"""
    return await build_preparation_summary(db, delivery_date or business_today())


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(order_id: str, db: AsyncSession = Depends(get_db)):
    order = await order_crud.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.put("/{order_id}", response_model=OrderUpdateResult)
async def update_order(order_id: str, updates: OrderUpdate, db: AsyncSession = Depends(get_db)):
    try:
        result = await OrderWriter(db).update(order_id, updates)
    except ValueError as e:
        log.warning("order %s update rejected: %s", order_id, e)
        raise HTTPException(status_code=400, detail=str(e))
    except OrderWriteError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not result:
        raise HTTPException(status_code=404, detail="Order not found")

    order, diff = result
    return OrderUpdateResult(order=OrderRead.model_validate(order), changes=diff.changes())


@router.patch("/{order_id}/status", response_model=OrderRead)
async def update_order_status(order_id: str, body: OrderStatusUpdate, db: AsyncSession = Depends(get_db)):
    order = await OrderWriter(db).set_status(order_id, body.status)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.delete("/{order_id}")
async def delete_order(order_id: str, db: AsyncSession = Depends(get_db)):
    try:
        order_number = await OrderWriter(db).delete(order_id)
    except OrderWriteError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not order_number:
        raise HTTPException(status_code=404, detail="Order not found")
    return {"message": f"Order {order_number} deleted"}


@router.get("/{order_id}/receipt", response_class=HTMLResponse)
async def order_receipt(order_id: str, db: AsyncSession = Depends(get_db)):
    order = await order_crud.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return HTMLResponse(render_receipt(order))
