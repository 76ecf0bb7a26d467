"""Customer directory views: totals, search/filter/sort and order history."""
from decimal import Decimal
from typing import List, Optional

from caterhub.schemas.customer import (
    CustomerOrderHistory,
    CustomerRead,
    CustomerSortField,
    CustomerWithTotals,
    SortOrder,
)
from caterhub.schemas.order import OrderRead
from caterhub.services.pricing import ZERO, money


def to_customer_with_totals(rows) -> List[CustomerWithTotals]:
    """rows are (Customer, total_order_value, order_count) tuples."""
    return [
        CustomerWithTotals(
            **CustomerRead.model_validate(customer).model_dump(),
            total_order_value=money(total),
            order_count=count or 0,
        )
        for customer, total, count in rows
    ]


def filter_customers(
    customers: List[CustomerWithTotals],
    search: Optional[str] = None,
    min_order_value: Optional[Decimal] = None,
    min_order_count: Optional[int] = None,
    sort_by: CustomerSortField = CustomerSortField.name,
    sort_order: SortOrder = SortOrder.asc,
) -> List[CustomerWithTotals]:
    result = list(customers)

    if search and search.strip():
        term = search.strip().lower()
        result = [
            c for c in result
            if term in c.name.lower()
            or term in c.phone
            or (c.email and term in c.email.lower())
        ]
    if min_order_value is not None:
        result = [c for c in result if c.total_order_value >= min_order_value]
    if min_order_count is not None:
        result = [c for c in result if c.order_count >= min_order_count]

    sort_by = CustomerSortField(sort_by)
    if sort_by == CustomerSortField.name:
        key = lambda c: c.name.lower()
    else:
        key = lambda c: getattr(c, sort_by.value)

    result.sort(key=key, reverse=SortOrder(sort_order) == SortOrder.desc)
    return result


def build_order_history(customer, orders) -> CustomerOrderHistory:
    total_spent = money(sum((money(o.total_amount) for o in orders), ZERO))
    return CustomerOrderHistory(
        customer=CustomerRead.model_validate(customer),
        orders=[OrderRead.model_validate(o) for o in orders],
        total_orders=len(orders),
        total_spent=total_spent,
        average_order_value=money(total_spent / len(orders)) if orders else ZERO,
    )
