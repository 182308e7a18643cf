"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: Unlike a blanket auth dependency at include time, access is
decided per route here: the storefront reads (menu, settings) are
public, customers need a token to order, and admin writes depend on
require_admin.
"""

from fastapi import APIRouter

from fastfood.api.auth import router as auth_router
from fastfood.api.health import router as health_router
from fastfood.api.menu import router as menu_router
from fastfood.api.orders import router as orders_router
from fastfood.api.payments import router as payments_router
from fastfood.api.settings import router as settings_router
from fastfood.api.uploads import router as uploads_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(menu_router, tags=["menu"])
api_router.include_router(orders_router, tags=["orders"])
api_router.include_router(settings_router, tags=["settings"])
api_router.include_router(payments_router, tags=["payments"])
api_router.include_router(uploads_router, tags=["uploads"])
