"""
Order data models for database documents.
Orders are written by the checkout flow; the API reads them and moves their status.
"""
from typing import Any, Dict, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from bson import ObjectId

from .user import utc_now

ORDER_STATUSES = ["Not Processed", "Processing", "Shipped", "Delivered", "Cancelled"]
DEFAULT_ORDER_STATUS = ORDER_STATUSES[0]


class OrderDocument(BaseModel):
    """
    Order document model representing the MongoDB document structure.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    products: List[ObjectId] = Field(default_factory=list, description="Ordered product references")
    payment: Dict[str, Any] = Field(default_factory=dict, description="Payment gateway result")
    buyer: ObjectId = Field(..., description="User who placed the order")
    status: str = Field(default=DEFAULT_ORDER_STATUS, description="Fulfilment status")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v not in ORDER_STATUSES:
            raise ValueError(f"Invalid status. Must be one of: {ORDER_STATUSES}")
        return v
