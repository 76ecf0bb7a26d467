"""
Order pricing.

Line totals are always unit_price x quantity, the subtotal is the sum of
line totals, and the order total is subtotal - discount + tip.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from caterhub.core.constants import DiscountType, SizeType, SIZE_PRICE_FIELDS

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def money(value) -> Decimal:
    if value is None:
        return ZERO
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity: int) -> Decimal:
    return money(money(unit_price) * quantity)


def price_for_size(menu_item, size_type: SizeType) -> Optional[Decimal]:
    """Menu item price for the requested size, or None when the item is not sold that way."""
    value = getattr(menu_item, SIZE_PRICE_FIELDS[SizeType(size_type)], None)
    return money(value) if value is not None else None


def discount_for(subtotal: Decimal, discount_type: Optional[str], discount_value) -> Decimal:
    if not discount_type or not discount_value:
        return ZERO

    value = money(discount_value)
    if value < 0:
        value = ZERO

    if DiscountType(discount_type) == DiscountType.PERCENTAGE:
        value = min(value, Decimal("100"))
        return money(subtotal * value / 100)

    return min(value, subtotal)


@dataclass
class OrderTotals:
    subtotal_amount: Decimal
    discount_amount: Decimal
    tip_amount: Decimal
    total_amount: Decimal


def compute_totals(
    line_totals: Iterable[Decimal],
    discount_type: Optional[str] = None,
    discount_value=None,
    tip_amount=None,
) -> OrderTotals:
    subtotal = money(sum((money(t) for t in line_totals), ZERO))
    discount = discount_for(subtotal, discount_type, discount_value)
    tip = money(tip_amount)
    return OrderTotals(
        subtotal_amount=subtotal,
        discount_amount=discount,
        tip_amount=tip,
        total_amount=money(subtotal - discount + tip),
    )
