"""Public menu presentation: price labels, notes and search ranking."""
from typing import List

from caterhub.schemas.menu import PublicMenuCategory, PublicMenuItem
from caterhub.services.messaging import menu_item_order_link
from caterhub.services.pricing import money


def _dollars(value) -> str:
    return f"${money(value)}"


def _sells_by_piece(item) -> bool:
    return bool(item.price_per_piece and item.pieces_per_plate)


def format_price(item) -> str:
    """
    "$2.00 per piece / $12.00 per plate" for breads sold by the piece,
    otherwise the plate / half tray / full tray prices that are set.
    """
    prices = []
    if _sells_by_piece(item):
        prices.append(f"{_dollars(item.price_per_piece)} per piece")
        if item.price_per_plate:
            prices.append(f"{_dollars(item.price_per_plate)} per plate")
    else:
        for value in (item.price_per_plate, item.price_half_tray, item.price_full_tray):
            if value:
                prices.append(_dollars(value))

    if not prices:
        return "Price not set"
    return " / ".join(prices)


def format_note(item) -> str:
    notes = []
    if _sells_by_piece(item) and item.min_piece_order:
        notes.append(f"{item.pieces_per_plate} pieces per plate")
        notes.append(f"Minimum {item.min_piece_order} pieces")
    else:
        if item.price_per_plate:
            notes.append("Plate")
        if item.price_half_tray:
            notes.append("Half tray")
        if item.price_full_tray:
            notes.append("Full tray")
    return " | ".join(notes)


def to_public_item(item, category_name: str = None) -> PublicMenuItem:
    price_label = format_price(item)
    price_note = format_note(item)
    return PublicMenuItem(
        id=item.id,
        name=item.name,
        description=item.description,
        image_url=item.image_url,
        ingredients=item.ingredients or [],
        price_label=price_label,
        price_note=price_note,
        order_link=menu_item_order_link(
            item.name, price_label, price_note, category_name or item.category_name or "",
        ),
    )


def build_public_menu(categories, items) -> List[PublicMenuCategory]:
    """Groups available items under their active categories, skipping empty ones."""
    by_category = {}
    for item in items:
        if item.is_available:
            by_category.setdefault(item.category_id, []).append(item)

    menu = []
    for category in categories:
        category_items = by_category.get(category.id)
        if not category_items:
            continue
        menu.append(
            PublicMenuCategory(
                id=category.id,
                name=category.name,
                description=category.description,
                items=[to_public_item(i, category.name) for i in category_items],
            )
        )
    return menu


def _matches(item, query: str) -> bool:
    if query in item.name.lower():
        return True
    if item.description and query in item.description.lower():
        return True
    return any(query in (ingredient or "").lower() for ingredient in (item.ingredients or []))


def search_menu_items(items, query: str):
    """
    Case-insensitive substring search over name, description and
    ingredients. Name matches come first, then alphabetical.
    """
    query = (query or "").strip().lower()
    if not query:
        return []

    found = [item for item in items if _matches(item, query)]
    found.sort(key=lambda item: (query not in item.name.lower(), item.name.lower()))
    return found
