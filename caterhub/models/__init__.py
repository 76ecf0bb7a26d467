from .base import Base
from .menu.menu_category import MenuCategory
from .menu.menu_item import MenuItem
from .customer.customer import Customer
from .customer.customer_order import Order, OrderItem
from .review import Review, ReviewMenuItem
from .todays_menu import TodaysMenu

__all__ = [
    "Base",
    "MenuCategory",
    "MenuItem",
    "Customer",
    "Order",
    "OrderItem",
    "Review",
    "ReviewMenuItem",
    "TodaysMenu",
]
