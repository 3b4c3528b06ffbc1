"""
Order API schemas for request validation.
"""
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from ..models.order import ORDER_STATUSES


class UpdateOrderStatusRequest(BaseModel):
    """Request schema for moving an order to a new status."""
    status: Optional[str] = Field(None, validate_default=True, description="New order status")

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v not in ORDER_STATUSES:
            raise ValueError("Invalid order status is provided")
        return v
