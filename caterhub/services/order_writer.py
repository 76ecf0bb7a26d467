"""
Order aggregate writes.

An order and its line items are always written together inside one
session transaction. Updates compare the stored items against the
submitted ones and only touch the rows that changed:

    deleted  = stored keys that are no longer submitted
    updated  = keys in both sets whose values differ
    inserted = submitted keys that are not stored yet

Items are keyed by (menu_item_id, size_type); custom lines without a
menu item are keyed by their name.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from caterhub.core.constants import SizeType
from caterhub.core.exceptions import OrderWriteError
from caterhub.crud.customer import find_customer_by_phone
from caterhub.crud.menu_item import get_menu_items_by_ids
from caterhub.crud.order import get_order, next_order_number
from caterhub.models.customer.customer import Customer
from caterhub.models.customer.customer_order import Order, OrderItem
from caterhub.schemas.order import OrderCreate, OrderUpdate, OrderItemChanges
from caterhub.services.pricing import compute_totals, line_total, money, price_for_size

log = logging.getLogger(__name__)

# Columns compared when deciding whether an existing line needs an UPDATE
COMPARED_FIELDS = ("quantity", "unit_price", "total_price", "special_instructions")

# Order columns that an explicit null in an update leaves untouched
REQUIRED_FIELDS = ("customer_name", "customer_phone", "delivery_date", "status")


def _plain(value):
    return value.value if isinstance(value, enum.Enum) else value


def item_key(menu_item_id, item_name, size_type) -> Tuple[str, str]:
    return (menu_item_id or item_name, _plain(size_type))


def _line_key(line: dict):
    return item_key(line["menu_item_id"], line["item_name"], line["size_type"])


def _row_key(item):
    return item_key(item.menu_item_id, item.item_name, item.size_type)


def _normalize(name, value):
    if name in ("unit_price", "total_price"):
        return money(value)
    if name == "special_instructions":
        return value or None
    return value


@dataclass
class OrderItemDiff:
    deleted: List[OrderItem] = field(default_factory=list)
    updated: List[Tuple[OrderItem, dict]] = field(default_factory=list)
    inserted: List[OrderItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.deleted or self.updated or self.inserted)

    def changes(self) -> OrderItemChanges:
        """Ids touched by each operation. Inserted ids exist only after a flush."""
        return OrderItemChanges(
            deleted=[item.id for item in self.deleted],
            updated=[item.id for item, _ in self.updated],
            inserted=[item.id for item in self.inserted if item.id],
        )


def diff_order_items(old_items, new_lines: List[dict]) -> OrderItemDiff:
    """
    Three-way diff between stored OrderItems and resolved new lines.

    Lines in the intersection are only reported as updated when one of
    COMPARED_FIELDS actually differs. Duplicate keys in new_lines raise
    ValueError.
    """
    new_by_key = {}
    for line in new_lines:
        key = _line_key(line)
        if key in new_by_key:
            raise ValueError(f"Duplicate order line for {line['item_name']} ({key[1]})")
        new_by_key[key] = line

    old_by_key = {_row_key(item): item for item in old_items}

    diff = OrderItemDiff()
    for key, item in old_by_key.items():
        if key not in new_by_key:
            diff.deleted.append(item)

    for key, line in new_by_key.items():
        item = old_by_key.get(key)
        if item is None:
            diff.inserted.append(OrderItem(**line))
            continue

        changed = {
            name: line[name]
            for name in COMPARED_FIELDS
            if _normalize(name, getattr(item, name)) != _normalize(name, line[name])
        }
        if changed:
            diff.updated.append((item, changed))

    return diff


class OrderWriter:
    """Creates, updates and deletes orders together with their line items."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _resolve_lines(self, items) -> List[dict]:
        """
        Validates submitted lines and fills in name and price from the
        menu item. Raises ValueError before anything is written.
        """
        menu_items = await get_menu_items_by_ids(
            self.db, {i.menu_item_id for i in items if i.menu_item_id}
        )

        lines = []
        seen = set()
        for item in items:
            size_type = SizeType(item.size_type)
            menu_item = None
            if item.menu_item_id:
                menu_item = menu_items.get(item.menu_item_id)
                if menu_item is None:
                    raise ValueError(f"Menu item {item.menu_item_id} not found")

            name = (item.item_name or (menu_item.name if menu_item else "")).strip()
            if not name:
                raise ValueError("Item name is required for items not on the menu")

            unit_price = item.unit_price
            if menu_item is not None:
                menu_price = price_for_size(menu_item, size_type)
                if menu_price is None:
                    raise ValueError(f"Price not available for this size: {name} ({size_type.value})")
                if unit_price is None:
                    unit_price = menu_price
                if (
                    size_type == SizeType.PIECE
                    and menu_item.min_piece_order
                    and item.quantity < menu_item.min_piece_order
                ):
                    raise ValueError(
                        f"Minimum order for {name} is {menu_item.min_piece_order} pieces"
                    )
            elif unit_price is None:
                raise ValueError(f"Unit price is required for {name}")

            line = {
                "menu_item_id": item.menu_item_id or None,
                "item_name": name,
                "size_type": size_type.value,
                "quantity": item.quantity,
                "unit_price": money(unit_price),
                "total_price": line_total(unit_price, item.quantity),
                "special_instructions": item.special_instructions or None,
            }
            key = _line_key(line)
            if key in seen:
                raise ValueError(f"Duplicate order line for {name} ({size_type.value})")
            seen.add(key)
            lines.append(line)

        return lines

    async def _resolve_customer(self, name: str, phone: str, address: Optional[str]) -> Customer:
        customer = await find_customer_by_phone(self.db, phone)
        if customer is None:
            customer = Customer(name=name.strip(), phone=phone.strip(), address=address)
            self.db.add(customer)
            await self.db.flush()
            log.info("created customer %s for phone %s", customer.id, customer.phone)
        return customer

    def _apply_totals(self, order: Order):
        totals = compute_totals(
            (item.total_price for item in order.items),
            order.discount_type,
            order.discount_value,
            order.tip_amount,
        )
        order.subtotal_amount = totals.subtotal_amount
        order.discount_amount = totals.discount_amount
        order.tip_amount = totals.tip_amount
        order.total_amount = totals.total_amount

    async def _fail(self, action: str, step: str, exc: Exception):
        await self.db.rollback()
        log.error("order %s failed at step '%s': %s", action, step, exc)
        raise OrderWriteError(action, step) from exc

    async def create(self, data: OrderCreate) -> Order:
        lines = await self._resolve_lines(data.items)

        step = "resolve customer"
        try:
            customer = await self._resolve_customer(
                data.customer_name, data.customer_phone, data.delivery_address
            )

            step = "generate order number"
            seq, order_number = await next_order_number(self.db)

            step = "insert order"
            order = Order(
                order_seq=seq,
                order_number=order_number,
                customer_id=customer.id,
                customer_name=data.customer_name.strip(),
                customer_phone=data.customer_phone.strip(),
                delivery_date=data.delivery_date,
                delivery_time=data.delivery_time,
                delivery_address=data.delivery_address,
                special_instructions=data.special_instructions,
                status=_plain(data.status),
                discount_type=_plain(data.discount_type),
                discount_value=money(data.discount_value),
                tip_amount=money(data.tip_amount),
                items=[],
            )
            self.db.add(order)
            await self.db.flush()

            step = "insert order items"
            for line in lines:
                order.items.append(OrderItem(order_id=order.id, **line))
            self._apply_totals(order)
            await self.db.flush()

            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("create", step, exc)

        log.info(
            "created order %s: %s items, total=%s",
            order_number, len(lines), order.total_amount,
        )
        return await get_order(self.db, order.id)

    async def update(self, order_id: str, data: OrderUpdate):
        """
        Applies field changes and, when items are submitted, the minimal
        item diff. Returns (order, diff) or None if the order does not exist.
        """
        order = await get_order(self.db, order_id)
        if not order:
            return None

        fields = data.model_dump(exclude_unset=True, exclude={"items"})
        lines = await self._resolve_lines(data.items) if data.items is not None else None
        diff = diff_order_items(order.items, lines) if lines is not None else OrderItemDiff()

        step = "update order fields"
        try:
            phone = fields.get("customer_phone")
            if phone and phone.strip() != order.customer_phone:
                customer = await self._resolve_customer(
                    fields.get("customer_name") or order.customer_name,
                    phone,
                    fields.get("delivery_address", order.delivery_address),
                )
                order.customer_id = customer.id

            for key, value in fields.items():
                if value is None and key in REQUIRED_FIELDS:
                    continue
                if key in ("discount_value", "tip_amount"):
                    value = money(value)
                elif key in ("customer_name", "customer_phone"):
                    value = value.strip()
                setattr(order, key, _plain(value))
            await self.db.flush()

            step = "delete removed items"
            for item in diff.deleted:
                order.items.remove(item)
            await self.db.flush()

            step = "update changed items"
            for item, changed in diff.updated:
                for key, value in changed.items():
                    setattr(item, key, value)
            await self.db.flush()

            step = "insert new items"
            for item in diff.inserted:
                item.order_id = order.id
                order.items.append(item)
            await self.db.flush()

            step = "recompute totals"
            self._apply_totals(order)
            await self.db.flush()

            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("update", step, exc)

        log.info(
            "updated order %s: deleted=%s updated=%s inserted=%s total=%s",
            order.order_number, len(diff.deleted), len(diff.updated),
            len(diff.inserted), order.total_amount,
        )
        return await get_order(self.db, order_id), diff

    async def delete(self, order_id: str):
        """Deletes the order's items, then the order. Returns the order number or None."""
        order = await get_order(self.db, order_id)
        if not order:
            return None

        order_number = order.order_number
        step = "delete order items"
        try:
            order.items.clear()
            await self.db.flush()

            step = "delete order"
            await self.db.delete(order)
            await self.db.flush()

            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("delete", step, exc)

        log.info("deleted order %s", order_number)
        return order_number

    async def set_status(self, order_id: str, status) -> Optional[Order]:
        order = await get_order(self.db, order_id)
        if not order:
            return None

        old_status = order.status
        order_number = order.order_number
        try:
            order.status = _plain(status)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self._fail("update", "update status", exc)

        log.info("order %s status: %s -> %s", order_number, old_status, _plain(status))
        return await get_order(self.db, order_id)
