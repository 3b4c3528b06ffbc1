"""
Schemas package for API request/response validation.
These models define the structure of data sent to and from the API endpoints.
"""

# Account schemas
from .auth import (
    RegisterRequest,
    LoginRequest,
    ForgotPasswordRequest,
    UpdateProfileRequest
)

# Catalog schemas
from .category import CategoryRequest
from .product import (
    CreateProductForm,
    UpdateProductForm,
    ProductFiltersRequest
)

# Order schemas
from .order import UpdateOrderStatusRequest

# Common schemas
from .common import (
    HealthCheckResponse,
    RootResponse,
    ErrorResponse,
    GuardResponse
)

__all__ = [
    # Account schemas
    "RegisterRequest",
    "LoginRequest",
    "ForgotPasswordRequest",
    "UpdateProfileRequest",

    # Catalog schemas
    "CategoryRequest",
    "CreateProductForm",
    "UpdateProductForm",
    "ProductFiltersRequest",

    # Order schemas
    "UpdateOrderStatusRequest",

    # Common schemas
    "HealthCheckResponse",
    "RootResponse",
    "ErrorResponse",
    "GuardResponse"
]
