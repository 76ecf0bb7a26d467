from fastapi import APIRouter
from . import category_routes
from . import menu_item_routes
from . import order_routes
from . import customer_routes
from . import review_routes
from . import todays_menu_routes
from . import report_routes

router = APIRouter()

router.include_router(category_routes.router, prefix="/categories", tags=["Admin Categories"])
router.include_router(menu_item_routes.router, prefix="/menu-items", tags=["Admin Menu Items"])
router.include_router(order_routes.router, prefix="/orders", tags=["Admin Orders"])
router.include_router(customer_routes.router, prefix="/customers", tags=["Admin Customers"])
router.include_router(review_routes.router, prefix="/reviews", tags=["Admin Reviews"])
router.include_router(todays_menu_routes.router, prefix="/todays-menu", tags=["Admin Today's Menu"])
router.include_router(report_routes.router, prefix="/reports", tags=["Admin Reports"])

__all__ = ["router"]
