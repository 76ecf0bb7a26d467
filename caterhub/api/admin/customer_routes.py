from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from caterhub.crud import customer as customer_crud
from caterhub.db import get_db
from caterhub.schemas.customer import (
    CustomerCreate,
    CustomerOrderHistory,
    CustomerRead,
    CustomerSortField,
    CustomerUpdate,
    CustomerWithTotals,
    SortOrder,
)
from caterhub.services.customers import build_order_history, filter_customers, to_customer_with_totals

router = APIRouter()


@router.get("/", response_model=List[CustomerWithTotals])
async def list_customers(
    search: Optional[str] = None,
    min_order_value: Optional[Decimal] = None,
    min_order_count: Optional[int] = None,
    sort_by: CustomerSortField = CustomerSortField.name,
    sort_order: SortOrder = SortOrder.asc,
    db: AsyncSession = Depends(get_db),
):
    """Customers with lifetime order totals, filtered and sorted"""
    rows = await customer_crud.get_customers_with_totals(db)
    return filter_customers(
        to_customer_with_totals(rows),
        search=search,
        min_order_value=min_order_value,
        min_order_count=min_order_count,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.post("/", response_model=CustomerRead, status_code=201)
async def create_customer(customer: CustomerCreate, db: AsyncSession = Depends(get_db)):
    return await customer_crud.create_customer(db, customer)


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(customer_id: str, db: AsyncSession = Depends(get_db)):
    customer = await customer_crud.get_customer(db, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.put("/{customer_id}", response_model=CustomerRead)
async def update_customer(customer_id: str, updates: CustomerUpdate, db: AsyncSession = Depends(get_db)):
    customer = await customer_crud.update_customer(db, customer_id, updates)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.delete("/{customer_id}")
async def delete_customer(customer_id: str, db: AsyncSession = Depends(get_db)):
    customer = await customer_crud.delete_customer(db, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return {"message": "Customer deleted"}


@router.get("/{customer_id}/orders", response_model=CustomerOrderHistory)
async def customer_order_history(customer_id: str, db: AsyncSession = Depends(get_db)):
    customer = await customer_crud.get_customer(db, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    orders = await customer_crud.get_customer_orders(db, customer_id)
    return build_order_history(customer, orders)
