from fastapi import APIRouter
from . import menu_routes
from . import todays_menu_routes
from . import review_routes
from . import contact_routes

router = APIRouter()

router.include_router(menu_routes.router, prefix="/menu", tags=["Menu"])
router.include_router(todays_menu_routes.router, prefix="/todays-menu", tags=["Today's Menu"])
router.include_router(review_routes.router, prefix="/reviews", tags=["Reviews"])
router.include_router(contact_routes.router, prefix="/contact", tags=["Contact"])

__all__ = ["router"]
