"""
Models package for database document structures.
These models represent how data is stored in MongoDB.
"""
from .user import UserDocument, USER_ROLE, ADMIN_ROLE
from .category import CategoryDocument
from .product import ProductDocument, ProductPhoto
from .order import OrderDocument, ORDER_STATUSES, DEFAULT_ORDER_STATUS

__all__ = [
    # User models
    "UserDocument",
    "USER_ROLE",
    "ADMIN_ROLE",

    # Catalog models
    "CategoryDocument",
    "ProductDocument",
    "ProductPhoto",

    # Order models
    "OrderDocument",
    "ORDER_STATUSES",
    "DEFAULT_ORDER_STATUS",
]
