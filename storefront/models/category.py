"""
Category data models for database documents.
"""
from datetime import datetime
from pydantic import BaseModel, Field

from .user import utc_now


class CategoryDocument(BaseModel):
    """Category document model; names are unique ignoring case."""
    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    slug: str = Field(..., description="URL slug derived from the name")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
