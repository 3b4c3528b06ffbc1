"""
API routers, mounted under the versioned prefix by the application.
"""
from fastapi import APIRouter

from . import auth, categories, orders, products

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(orders.router)
api_router.include_router(categories.router)
api_router.include_router(products.router)

__all__ = ["api_router"]
