"""
Product data models for database documents.
These represent the actual structure of documents stored in MongoDB.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from bson import ObjectId

from .user import utc_now


class ProductPhoto(BaseModel):
    """Product image stored inline with the product."""
    data: bytes = Field(..., description="Raw image bytes")
    content_type: str = Field(..., description="MIME type sent back with the image")


class ProductDocument(BaseModel):
    """
    Product document model representing the MongoDB document structure.
    ``category`` references a document in the categories collection.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, max_length=100, description="Product name")
    slug: str = Field(..., description="URL slug derived from the name")
    description: str = Field(..., min_length=1, max_length=500, description="Product description")
    price: float = Field(..., gt=0, description="Unit price, rounded to cents")
    category: ObjectId = Field(..., description="Category reference")
    quantity: int = Field(..., gt=0, description="Units in stock")
    shipping: bool = Field(default=False, description="Whether the product ships")
    photo: Optional[ProductPhoto] = Field(None, description="Product image")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
