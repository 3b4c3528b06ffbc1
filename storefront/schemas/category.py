"""
Category API schemas for request validation.
"""
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from ..utils.validators import MAX_CATEGORY_NAME_LENGTH, is_blank


class CategoryRequest(BaseModel):
    """Request schema for creating or renaming a category."""
    name: Optional[str] = Field(None, validate_default=True, description="Category name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if is_blank(v):
            raise ValueError("Name is required")
        v = v.strip()
        if len(v) > MAX_CATEGORY_NAME_LENGTH:
            raise ValueError("Name of category can only be up to 100 characters long")
        return v
